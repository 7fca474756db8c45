from .converter import HEALTH_CHECKS_MEASUREMENT, ConversionContext, Converter
from .formatter import Formatter
from .set_items import ItemLabel, SetItem, parse_health_check_name, parse_item_label, tag_identifier
from .tags import TagSource, join_tags, to_tags

__all__ = [
    "ConversionContext",
    "Converter",
    "Formatter",
    "HEALTH_CHECKS_MEASUREMENT",
    "ItemLabel",
    "SetItem",
    "TagSource",
    "join_tags",
    "parse_health_check_name",
    "parse_item_label",
    "tag_identifier",
    "to_tags",
]
