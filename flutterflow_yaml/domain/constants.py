"""Path conventions and wrapper keys for FlutterFlow project documents."""

from flutterflow_yaml.domain.enums import EntityKind

DOCUMENT_EXTENSION = '.yaml'

# Extensions stripped when deriving an entity name from its filename
NAME_EXTENSIONS = ('.yaml', '.yml')

# Checked in order; the first path present wins
APP_STATE_PATHS = ('app-state.yaml', 'appState.yaml')

COLLECTIONS_INDEX_FILE = 'collections.yaml'
COLLECTIONS_INDEX_KEY = 'collections'

CUSTOM_CODE_FOLDER = 'custom_code'

WRAPPER_KEYS = {
    EntityKind.COMPONENT: 'componentDefinition',
    EntityKind.PAGE: 'pageDefinition',
    EntityKind.CUSTOM_ACTION: 'actionDefinition',
    EntityKind.CUSTOM_FUNCTION: 'functionDefinition',
    EntityKind.CUSTOM_WIDGET: 'widgetDefinition',
    EntityKind.COLLECTION: 'collectionDefinition',
}

# Folder used when synthesizing a path for a new entity
KIND_TO_FOLDER = {
    EntityKind.COMPONENT: 'components',
    EntityKind.PAGE: 'pages',
    EntityKind.CUSTOM_ACTION: 'custom_code/actions',
    EntityKind.CUSTOM_FUNCTION: 'custom_code/functions',
    EntityKind.CUSTOM_WIDGET: 'custom_code/widgets',
    EntityKind.COLLECTION: 'collections',
}

# Accepted spellings for the kind argument of CLI and tool calls
KIND_ALIASES = {
    'component': EntityKind.COMPONENT,
    'components': EntityKind.COMPONENT,
    'page': EntityKind.PAGE,
    'pages': EntityKind.PAGE,
    'action': EntityKind.CUSTOM_ACTION,
    'custom_action': EntityKind.CUSTOM_ACTION,
    'function': EntityKind.CUSTOM_FUNCTION,
    'custom_function': EntityKind.CUSTOM_FUNCTION,
    'widget': EntityKind.CUSTOM_WIDGET,
    'custom_widget': EntityKind.CUSTOM_WIDGET,
    'collection': EntityKind.COLLECTION,
    'collections': EntityKind.COLLECTION,
}
