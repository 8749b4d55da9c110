"""Unit normalization for ingredient quantities.

Recognized mass and volume units are normalized into grams. Volumes are
taken at water density (1 ml == 1 g) so that a recipe asking for cups can
be checked against a pantry stocked in grams. Labels that are not in the
table normalize to their lower-cased, whitespace-collapsed form and only
match labels that clean up the same way.
"""

from pantry_pace.domain.units import NormalizedQuantity, UnitConversion, UnitKind

BASE_UNIT = "g"

_MASS = {
    "g": 1.0,
    "mg": 0.001,
    "kg": 1000.0,
    "oz": 28.3495,
    "lb": 453.592,
    "stick": 113.398,
}

_VOLUME = {
    "ml": 1.0,
    "l": 1000.0,
    "tsp": 4.92892,
    "tbsp": 14.7868,
    "fl oz": 29.5735,
    "cup": 236.588,
    "pint": 473.176,
    "quart": 946.353,
    "gallon": 3785.41,
}

_ALIASES = {
    "gram": "g",
    "grams": "g",
    "gr": "g",
    "milligram": "mg",
    "milligrams": "mg",
    "kilogram": "kg",
    "kilograms": "kg",
    "kgs": "kg",
    "ounce": "oz",
    "ounces": "oz",
    "pound": "lb",
    "pounds": "lb",
    "lbs": "lb",
    "sticks": "stick",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "liter": "l",
    "liters": "l",
    "litre": "l",
    "litres": "l",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tsps": "tsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tbsps": "tbsp",
    "tbs": "tbsp",
    "fluid ounce": "fl oz",
    "fluid ounces": "fl oz",
    "cups": "cup",
    "pints": "pint",
    "quarts": "quart",
    "gallons": "gallon",
}


def _build_table() -> dict[str, UnitConversion]:
    table: dict[str, UnitConversion] = {}
    for label, multiplier in _MASS.items():
        table[label] = UnitConversion(kind=UnitKind.MASS, multiplier=multiplier)
    for label, multiplier in _VOLUME.items():
        table[label] = UnitConversion(kind=UnitKind.VOLUME, multiplier=multiplier)
    for alias, label in _ALIASES.items():
        table[alias] = table[label]
    return table


UNIT_CONVERSIONS: dict[str, UnitConversion] = _build_table()


def lookup_unit(unit: str | None) -> UnitConversion | None:
    """Return the conversion for a unit label, if it is recognized."""
    return UNIT_CONVERSIONS.get(_clean(unit))


def conversion_multiplier(unit: str | None) -> float:
    """Return the base-unit multiplier for a label, 1 for unknown labels."""
    conversion = lookup_unit(unit)
    return conversion.multiplier if conversion else 1.0


def normalize(quantity: float, unit: str | None) -> NormalizedQuantity:
    """Convert a quantity into its base unit."""
    conversion = lookup_unit(unit)
    if conversion is None:
        return NormalizedQuantity(base_quantity=quantity, base_unit=_clean(unit))
    return NormalizedQuantity(
        base_quantity=quantity * conversion.multiplier, base_unit=BASE_UNIT
    )


def _clean(unit: str | None) -> str:
    return " ".join((unit or "").lower().split())
