"""
General MIDI program and controller name tables.

Program numbers are 0-based (0-127) as they appear on the wire in a
Program Change event. Channel 9 (0-based; "channel 10" to musicians) is the
General MIDI percussion channel, where the program selects a drum kit.
"""

from typing import Optional

PERCUSSION_CHANNEL = 9

# General MIDI Level 1 program names (0-127)
GM_INSTRUMENTS = [
    "Acoustic Grand Piano",
    "Bright Acoustic Piano",
    "Electric Grand Piano",
    "Honky-tonk Piano",
    "Electric Piano 1",
    "Electric Piano 2",
    "Harpsichord",
    "Clavinet",
    "Celesta",
    "Glockenspiel",
    "Music Box",
    "Vibraphone",
    "Marimba",
    "Xylophone",
    "Tubular Bells",
    "Dulcimer",
    "Drawbar Organ",
    "Percussive Organ",
    "Rock Organ",
    "Church Organ",
    "Reed Organ",
    "Accordion",
    "Harmonica",
    "Tango Accordion",
    "Acoustic Guitar (nylon)",
    "Acoustic Guitar (steel)",
    "Electric Guitar (jazz)",
    "Electric Guitar (clean)",
    "Electric Guitar (muted)",
    "Overdriven Guitar",
    "Distortion Guitar",
    "Guitar Harmonics",
    "Acoustic Bass",
    "Electric Bass (finger)",
    "Electric Bass (pick)",
    "Fretless Bass",
    "Slap Bass 1",
    "Slap Bass 2",
    "Synth Bass 1",
    "Synth Bass 2",
    "Violin",
    "Viola",
    "Cello",
    "Contrabass",
    "Tremolo Strings",
    "Pizzicato Strings",
    "Orchestral Harp",
    "Timpani",
    "String Ensemble 1",
    "String Ensemble 2",
    "Synth Strings 1",
    "Synth Strings 2",
    "Choir Aahs",
    "Voice Oohs",
    "Synth Voice",
    "Orchestra Hit",
    "Trumpet",
    "Trombone",
    "Tuba",
    "Muted Trumpet",
    "French Horn",
    "Brass Section",
    "Synth Brass 1",
    "Synth Brass 2",
    "Soprano Sax",
    "Alto Sax",
    "Tenor Sax",
    "Baritone Sax",
    "Oboe",
    "English Horn",
    "Bassoon",
    "Clarinet",
    "Piccolo",
    "Flute",
    "Recorder",
    "Pan Flute",
    "Blown Bottle",
    "Shakuhachi",
    "Whistle",
    "Ocarina",
    "Lead 1 (square)",
    "Lead 2 (sawtooth)",
    "Lead 3 (calliope)",
    "Lead 4 (chiff)",
    "Lead 5 (charang)",
    "Lead 6 (voice)",
    "Lead 7 (fifths)",
    "Lead 8 (bass + lead)",
    "Pad 1 (new age)",
    "Pad 2 (warm)",
    "Pad 3 (polysynth)",
    "Pad 4 (choir)",
    "Pad 5 (bowed)",
    "Pad 6 (metallic)",
    "Pad 7 (halo)",
    "Pad 8 (sweep)",
    "FX 1 (rain)",
    "FX 2 (soundtrack)",
    "FX 3 (crystal)",
    "FX 4 (atmosphere)",
    "FX 5 (brightness)",
    "FX 6 (goblins)",
    "FX 7 (echoes)",
    "FX 8 (sci-fi)",
    "Sitar",
    "Banjo",
    "Shamisen",
    "Koto",
    "Kalimba",
    "Bagpipe",
    "Fiddle",
    "Shanai",
    "Tinkle Bell",
    "Agogo",
    "Steel Drums",
    "Woodblock",
    "Taiko Drum",
    "Melodic Tom",
    "Synth Drum",
    "Reverse Cymbal",
    "Guitar Fret Noise",
    "Breath Noise",
    "Seashore",
    "Bird Tweet",
    "Telephone Ring",
    "Helicopter",
    "Applause",
    "Gunshot",
]

# Families of eight consecutive programs
GM_FAMILIES = [
    "Piano",
    "Chromatic Percussion",
    "Organ",
    "Guitar",
    "Bass",
    "Strings",
    "Ensemble",
    "Brass",
    "Reed",
    "Pipe",
    "Synth Lead",
    "Synth Pad",
    "Synth Effects",
    "Ethnic",
    "Percussive",
    "Sound Effects",
]

# General MIDI Level 2 drum kits, selected by program on the percussion channel
GM_DRUM_KITS = {
    0: "Standard Kit",
    8: "Room Kit",
    16: "Power Kit",
    24: "Electronic Kit",
    25: "Analog Kit",
    32: "Jazz Kit",
    40: "Brush Kit",
    48: "Orchestra Kit",
    56: "SFX Kit",
}

# Commonly used controller numbers
GM_CONTROLLERS = {
    0: "Bank Select MSB",
    1: "Modulation",
    2: "Breath",
    4: "Foot",
    5: "Portamento Time",
    6: "Data Entry MSB",
    7: "Volume",
    8: "Balance",
    10: "Pan",
    11: "Expression",
    32: "Bank Select LSB",
    38: "Data Entry LSB",
    64: "Sustain",
    65: "Portamento",
    66: "Sostenuto",
    67: "Soft Pedal",
    71: "Resonance",
    72: "Release Time",
    73: "Attack Time",
    74: "Cutoff",
    91: "Reverb Send",
    93: "Chorus Send",
    98: "NRPN LSB",
    99: "NRPN MSB",
    100: "RPN LSB",
    101: "RPN MSB",
    120: "All Sound Off",
    121: "Reset All Controllers",
    123: "All Notes Off",
}


def get_instrument_name(program: int, channel: int = 0) -> str:
    """
    Get the General MIDI name for a program number.

    Args:
        program: Program number (0-127)
        channel: MIDI channel (0-15); channel 9 selects drum kits

    Returns:
        Human-readable instrument or kit name
    """
    if channel == PERCUSSION_CHANNEL:
        return GM_DRUM_KITS.get(program, f"Drum Kit {program}")

    if 0 <= program < len(GM_INSTRUMENTS):
        return GM_INSTRUMENTS[program]

    return f"Program {program}"


def get_instrument_category(program: int) -> str:
    """Get the General MIDI family of a program, e.g. 40 -> "Strings"."""
    if not 0 <= program <= 127:
        return "Unknown"
    return GM_FAMILIES[program // 8]


def get_controller_name(controller: int) -> Optional[str]:
    """Get the conventional name of a controller number, if it has one."""
    return GM_CONTROLLERS.get(controller)
