from enum import Enum


class MaterialType(str, Enum):
    """Category of waste offered in a listing."""

    PLASTIC = "PLASTIC"
    ORGANIC = "ORGANIC"
    CONSTRUCTION = "CONSTRUCTION"
    EWASTE = "EWASTE"

    @property
    def label(self) -> str:
        return _MATERIAL_LABELS[self]


_MATERIAL_LABELS: dict[MaterialType, str] = {
    MaterialType.PLASTIC: "Plastic",
    MaterialType.ORGANIC: "Organic",
    MaterialType.CONSTRUCTION: "Construction",
    MaterialType.EWASTE: "E-waste",
}


class Unit(str, Enum):
    """Unit the listed quantity is measured in."""

    KG = "KG"
    TONNES = "TONNES"
    PIECES = "PIECES"
    LITERS = "LITERS"
    BAGS = "BAGS"
