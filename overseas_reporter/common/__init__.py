# Common utilities
from .config_loader import (
    load_config,
    load_location_aliases,
    load_locations,
    load_selectors,
    load_settings,
    load_shop_config,
)
from .dom_utils import is_visible, visible_lines, visible_text
from .log_config import setup_logging
from .text_utils import (
    is_plausible_name,
    normalize_text,
    parse_integer,
    parse_money,
    parse_trailing_integer,
)
