from enum import Enum


class ItemCategory(str, Enum):
    RM = "RM"  # raw material
    FG = "FG"  # finished good


class BOMStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class SupplyType(str, Enum):
    INTRA_STATE = "intra_state"  # CGST + SGST
    INTER_STATE = "inter_state"  # IGST


# Hard process bounds; individual BOM rules narrow these.
ANNEALING_COUNT_MAX = 7
DRAW_PASS_COUNT_MAX = 10
