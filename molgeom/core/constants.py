"""Constants and element tables."""

# Tag value marking an atom record that was never filled from input
UNINITIALIZED_TAG = -1

# Below this, an arm length or sin(phi) is treated as zero
DEFAULT_TOLERANCE = 1e-10

# Atomic number -> element symbol
ELEMENT_SYMBOLS = {
    1: "H", 2: "He",
    3: "Li", 4: "Be", 5: "B", 6: "C", 7: "N", 8: "O", 9: "F", 10: "Ne",
    11: "Na", 12: "Mg", 13: "Al", 14: "Si", 15: "P", 16: "S", 17: "Cl",
    18: "Ar",
    19: "K", 20: "Ca", 21: "Sc", 22: "Ti", 23: "V", 24: "Cr", 25: "Mn",
    26: "Fe", 27: "Co", 28: "Ni", 29: "Cu", 30: "Zn", 31: "Ga", 32: "Ge",
    33: "As", 34: "Se", 35: "Br", 36: "Kr",
    37: "Rb", 38: "Sr", 46: "Pd", 47: "Ag", 50: "Sn", 53: "I", 54: "Xe",
    55: "Cs", 56: "Ba", 78: "Pt", 79: "Au", 80: "Hg", 82: "Pb",
}

ATOMIC_NUMBERS = {symbol: number for number, symbol in ELEMENT_SYMBOLS.items()}

# Isotope labels commonly found in XYZ files
ATOMIC_NUMBERS.update({"D": 1, "T": 1})

# Symbol used for tags that are not a known atomic number
UNKNOWN_SYMBOL = "X"


def symbol_for_tag(tag: int) -> str:
    """Return the element symbol for an atomic-number tag."""
    return ELEMENT_SYMBOLS.get(tag, UNKNOWN_SYMBOL)


def tag_for_symbol(symbol: str) -> int:
    """
    Return the atomic number for an element symbol.

    Matching is case-insensitive ("cl", "CL" and "Cl" all give 17).

    Raises:
        KeyError: If the symbol is not a known element
    """
    normalized = symbol.strip().capitalize()
    return ATOMIC_NUMBERS[normalized]

