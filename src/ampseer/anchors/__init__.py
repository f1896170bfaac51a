from ampseer.anchors.encoding import (
    Anchor,
    InvalidNucleotideError,
    decode_anchor,
    encode_anchor,
    reverse_complement,
    reverse_complement_anchor,
)
from ampseer.anchors.index import (
    PanelIndex,
    PrimerFormatError,
    PrimerTooShortError,
    UnrecognizedOrientationError,
    build_panel_index,
    load_panel_index,
    panel_name_from_path,
)

__all__ = [
    "Anchor",
    "InvalidNucleotideError",
    "PanelIndex",
    "PrimerFormatError",
    "PrimerTooShortError",
    "UnrecognizedOrientationError",
    "build_panel_index",
    "decode_anchor",
    "encode_anchor",
    "load_panel_index",
    "panel_name_from_path",
    "reverse_complement",
    "reverse_complement_anchor",
]
