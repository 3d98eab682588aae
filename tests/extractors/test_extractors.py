"""Tests for entity extractors."""

import copy

import pytest

from flutterflow_yaml.domain.enums import EntityKind
from flutterflow_yaml.extractor_registry import (
    ExtractorRegistry,
    extract_app_state,
    extract_components,
    extract_custom_code,
    extract_database_collections,
    extract_pages,
)
from flutterflow_yaml.extractors import ComponentExtractor, PageExtractor


def _by_name(records):
    return {r['name']: r for r in records}


class TestComponentExtractor:
    """Tests for component extraction."""

    def test_extracts_named_and_unnamed_components(self, sample_documents):
        components = _by_name(extract_components(sample_documents))
        assert set(components) == {'Button', 'my_custom_button'}

    def test_record_fields(self, sample_documents):
        button = _by_name(extract_components(sample_documents))['Button']
        assert button['path'] == 'components/button.yaml'
        assert button['definition'] is sample_documents['components/button.yaml']['componentDefinition']
        assert button['properties']['label']['type'] == 'String'
        assert button['widgets'] == [{'type': 'ElevatedButton', 'id': 'btn_1'}]

    def test_name_derived_from_filename(self, sample_documents):
        unnamed = _by_name(extract_components(sample_documents))['my_custom_button']
        assert unnamed['path'] == 'components/my_custom_button.yaml'

    def test_missing_projections_are_empty(self):
        records = extract_components({'components/bare.yaml': {'componentDefinition': {}}})
        assert records == [{
            'path': 'components/bare.yaml',
            'name': 'bare',
            'definition': {},
            'properties': {},
            'widgets': [],
        }]

    def test_document_without_wrapper_is_skipped(self):
        documents = {'components/orphan.yaml': {'somethingElse': {'name': 'Orphan'}}}
        assert extract_components(documents) == []

    def test_pages_never_appear_as_components(self, sample_documents):
        paths = {r['path'] for r in extract_components(sample_documents)}
        assert 'pages/home_page.yaml' not in paths

    def test_wrapper_outside_components_folder_is_ignored(self):
        documents = {'pages/odd.yaml': {'componentDefinition': {'name': 'Odd'}}}
        assert ComponentExtractor().extract(documents) == []


class TestPageExtractor:
    """Tests for page extraction."""

    def test_extracts_page(self, sample_documents):
        pages = extract_pages(sample_documents)
        assert len(pages) == 1
        page = pages[0]
        assert page['name'] == 'HomePage'
        assert page['route'] == '/home'
        assert page['widgets'][0]['type'] == 'Column'
        assert page['actions'] == [{'trigger': 'onLoad', 'action': 'fetchUser'}]

    def test_route_is_nullable(self):
        page = PageExtractor().extract({'pages/settings.yaml': {'pageDefinition': {}}})[0]
        assert page['name'] == 'settings'
        assert page['route'] is None
        assert page['widgets'] == []
        assert page['actions'] == []


class TestCustomCodeExtractor:
    """Tests for custom code extraction."""

    def test_groups_by_flavour(self, sample_documents):
        custom_code = extract_custom_code(sample_documents)
        assert set(custom_code) == {'actions', 'functions', 'widgets'}
        assert [a['name'] for a in custom_code['actions']] == ['sendEmail']
        assert [f['name'] for f in custom_code['functions']] == ['formatDate']
        assert [w['name'] for w in custom_code['widgets']] == ['RatingBar']

    def test_action_record(self, sample_documents):
        action = extract_custom_code(sample_documents)['actions'][0]
        assert action['path'] == 'custom_code/actions/send_email.yaml'
        assert 'mailer.send' in action['code']
        assert action['parameters'] == [{'name': 'to', 'type': 'String'}]

    def test_widget_record_has_properties(self, sample_documents):
        widget = extract_custom_code(sample_documents)['widgets'][0]
        assert widget['properties'] == [{'name': 'rating', 'type': 'double'}]
        assert 'parameters' not in widget

    def test_defaults(self):
        documents = {
            'custom_code/actions/noop.yaml': {'actionDefinition': {'name': 'noop'}},
            'custom_code/widgets/blank.yaml': {'widgetDefinition': {'code': None}},
        }
        custom_code = extract_custom_code(documents)
        assert custom_code['actions'][0]['code'] == ''
        assert custom_code['actions'][0]['parameters'] == []
        assert custom_code['widgets'][0]['name'] == 'blank'
        assert custom_code['widgets'][0]['code'] == ''
        assert custom_code['widgets'][0]['properties'] == []
        assert custom_code['functions'] == []

    def test_wrapper_must_match_folder(self):
        documents = {'custom_code/functions/wrong.yaml': {'actionDefinition': {'name': 'wrong'}}}
        custom_code = extract_custom_code(documents)
        assert custom_code == {'actions': [], 'functions': [], 'widgets': []}


class TestCollectionExtractor:
    """Tests for database collection extraction."""

    def test_dual_layout_concatenation(self, sample_documents):
        collections = extract_database_collections(sample_documents)
        assert sorted(c['name'] for c in collections) == ['posts', 'users']

    def test_per_file_record(self, sample_documents):
        users = _by_name(extract_database_collections(sample_documents))['users']
        assert users['path'] == 'collections/users.yaml'
        assert [f['name'] for f in users['fields']] == ['email', 'createdAt']
        assert users['indexes'] == [{'fields': ['email'], 'unique': True}]

    def test_index_record(self, sample_documents):
        posts = _by_name(extract_database_collections(sample_documents))['posts']
        assert posts['path'] == 'collections.yaml'
        assert posts['definition'] is sample_documents['collections.yaml']['collections']['posts']
        assert len(posts['fields']) == 2
        assert posts['indexes'] == []

    def test_duplicate_names_are_kept(self):
        documents = {
            'collections/posts.yaml': {'collectionDefinition': {'fields': []}},
            'collections.yaml': {'collections': {'posts': {'fields': [{'name': 'title'}]}}},
        }
        names = [c['name'] for c in extract_database_collections(documents)]
        assert names == ['posts', 'posts']

    def test_null_index_entry(self):
        records = extract_database_collections({'collections.yaml': {'collections': {'empty': None}}})
        assert records == [{
            'path': 'collections.yaml', 'name': 'empty', 'definition': None, 'fields': [], 'indexes': [],
        }]

    def test_index_without_collections_map(self):
        assert extract_database_collections({'collections.yaml': {'other': {}}}) == []


class TestAppStateExtractor:
    """Tests for app state extraction."""

    def test_extracts_sections(self, sample_documents):
        app_state = extract_app_state(sample_documents)
        assert app_state['variables'][0]['name'] == 'currentUser'
        assert app_state['dataTypes'][0]['name'] == 'User'
        assert app_state['constants'] == []

    def test_absent_is_none(self):
        assert extract_app_state({'pages/home.yaml': {'pageDefinition': {}}}) is None

    def test_alternate_path(self):
        app_state = extract_app_state({'appState.yaml': {'constants': [{'name': 'API_URL'}]}})
        assert app_state == {'variables': [], 'dataTypes': [], 'constants': [{'name': 'API_URL'}]}

    def test_precedence(self):
        documents = {
            'appState.yaml': {'variables': [{'name': 'fromCamel'}]},
            'app-state.yaml': {'variables': [{'name': 'fromKebab'}]},
        }
        assert extract_app_state(documents)['variables'] == [{'name': 'fromKebab'}]


class TestExtractionProperties:
    """Cross-cutting extraction guarantees."""

    @pytest.mark.parametrize('extract', [
        extract_components, extract_pages, extract_database_collections,
    ])
    def test_order_independence(self, sample_documents, extract):
        reversed_documents = dict(reversed(list(sample_documents.items())))
        key = lambda r: (r['path'], r['name'])
        assert sorted(extract(sample_documents), key=key) == sorted(extract(reversed_documents), key=key)

    def test_extraction_does_not_mutate_input(self, sample_documents):
        snapshot = copy.deepcopy(sample_documents)
        extract_components(sample_documents)
        extract_pages(sample_documents)
        extract_custom_code(sample_documents)
        extract_database_collections(sample_documents)
        extract_app_state(sample_documents)
        assert sample_documents == snapshot

    def test_empty_mapping(self):
        assert extract_components({}) == []
        assert extract_pages({}) == []
        assert extract_custom_code({}) == {'actions': [], 'functions': [], 'widgets': []}
        assert extract_database_collections({}) == []
        assert extract_app_state({}) is None


class TestExtractorRegistry:
    """Tests for ExtractorRegistry."""

    def test_supported_kinds(self):
        kinds = set(ExtractorRegistry().get_supported_kinds())
        assert kinds == {
            EntityKind.COMPONENT, EntityKind.PAGE, EntityKind.CUSTOM_ACTION,
            EntityKind.CUSTOM_FUNCTION, EntityKind.CUSTOM_WIDGET, EntityKind.COLLECTION,
        }

    def test_unknown_kind_raises(self):
        with pytest.raises(KeyError):
            ExtractorRegistry().get_extractor(EntityKind.APP_STATE)

    def test_register_override(self):
        registry = ExtractorRegistry()
        extractor = ComponentExtractor()
        registry.register_extractor(EntityKind.COMPONENT, extractor)
        assert registry.get_extractor(EntityKind.COMPONENT) is extractor
