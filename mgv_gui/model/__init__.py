"""Model layer holding the strips, regions and navigation state of the zoom view."""

from .collaborators import ChromosomeBounds, CoordinateValidator, FeatureStore, SyntenyBlock, SyntenyTranslator
from .entities import Cds, Chromosome, Coords, Feature, Genome, LandmarkSpec, Region, Strip, Transcript
from .layout import LayoutEngine, layout_strip, scale_adjust
from .modes import FREE, LOCKED, Free, Landmark, Locked, NavigationMode, Reference
from .region_manager import REGION_OPS, RegionChange, RegionManager
from .region_store import RegionStore
from .sequences import SEQUENCE_TYPES, SequenceDescriptor, select_sequences
from .synteny import SyntenyMapper, combine_regions
from .landmark import LandmarkAligner, anchor_position

__all__ = [
    "Chromosome",
    "Genome",
    "Feature",
    "Transcript",
    "Cds",
    "Region",
    "Strip",
    "LandmarkSpec",
    "Coords",
    "FeatureStore",
    "SyntenyTranslator",
    "SyntenyBlock",
    "CoordinateValidator",
    "ChromosomeBounds",
    "RegionStore",
    "LayoutEngine",
    "layout_strip",
    "scale_adjust",
    "NavigationMode",
    "Free",
    "Locked",
    "Reference",
    "Landmark",
    "FREE",
    "LOCKED",
    "RegionManager",
    "RegionChange",
    "REGION_OPS",
    "SyntenyMapper",
    "combine_regions",
    "LandmarkAligner",
    "anchor_position",
    "SEQUENCE_TYPES",
    "SequenceDescriptor",
    "select_sequences",
]
