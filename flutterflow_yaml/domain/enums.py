"""Domain enums for the FlutterFlow YAML toolkit."""
from enum import Enum


class EntityKind(Enum):
    """Entity kinds recognized inside a project bundle."""
    COMPONENT = "component"
    PAGE = "page"
    CUSTOM_ACTION = "custom_action"
    CUSTOM_FUNCTION = "custom_function"
    CUSTOM_WIDGET = "custom_widget"
    COLLECTION = "collection"
    COLLECTION_INDEX = "collection_index"
    APP_STATE = "app_state"
    UNRECOGNIZED = "unrecognized"
