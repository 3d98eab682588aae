"""Shared test fixtures."""

import base64
import io
import zipfile

import pytest
import yaml


# ── Sample YAML Content ──────────────────────────────────────────────────

COMPONENT_YAML = """\
componentDefinition:
  name: Button
  description: Primary call-to-action button
  properties:
    label:
      type: String
      defaultValue: Click me
  widgets:
    - type: ElevatedButton
      id: btn_1
"""

UNNAMED_COMPONENT_YAML = """\
componentDefinition:
  description: A button without an explicit name
"""

PAGE_YAML = """\
pageDefinition:
  name: HomePage
  route: /home
  widgets:
    - type: Column
      children:
        - type: Text
          value: Welcome
  actions:
    - trigger: onLoad
      action: fetchUser
"""

ACTION_YAML = """\
actionDefinition:
  name: sendEmail
  code: |
    Future sendEmail(String to) async {
      await mailer.send(to);
    }
  parameters:
    - name: to
      type: String
"""

FUNCTION_YAML = """\
functionDefinition:
  name: formatDate
  code: "String formatDate(DateTime d) => d.toIso8601String();"
  parameters:
    - name: d
      type: DateTime
"""

WIDGET_YAML = """\
widgetDefinition:
  name: RatingBar
  code: "class RatingBar extends StatelessWidget {}"
  properties:
    - name: rating
      type: double
"""

COLLECTION_YAML = """\
collectionDefinition:
  name: users
  fields:
    - name: email
      type: String
      required: true
    - name: createdAt
      type: DateTime
  indexes:
    - fields: [email]
      unique: true
"""

COLLECTIONS_INDEX_YAML = """\
collections:
  posts:
    fields:
      - name: title
        type: String
      - name: author
        type: DocumentReference
"""

APP_STATE_YAML = """\
variables:
  - name: currentUser
    type: User
    persisted: true
dataTypes:
  - name: User
    fields:
      - name: id
        type: String
"""

SAMPLE_FILES = {
    'components/button.yaml': COMPONENT_YAML,
    'components/my_custom_button.yaml': UNNAMED_COMPONENT_YAML,
    'pages/home_page.yaml': PAGE_YAML,
    'custom_code/actions/send_email.yaml': ACTION_YAML,
    'custom_code/functions/format_date.yaml': FUNCTION_YAML,
    'custom_code/widgets/rating_bar.yaml': WIDGET_YAML,
    'collections/users.yaml': COLLECTION_YAML,
    'collections.yaml': COLLECTIONS_INDEX_YAML,
    'app-state.yaml': APP_STATE_YAML,
}


def build_bundle(entries: dict) -> str:
    """Zip raw entry contents and return the archive as base64 text."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return base64.b64encode(buffer.getvalue()).decode('ascii')


# ── Fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def sample_documents():
    """A decoded project covering every entity kind."""
    return {path: yaml.safe_load(content) for path, content in SAMPLE_FILES.items()}


@pytest.fixture
def sample_bundle():
    """The sample project as a base64 ZIP bundle."""
    return build_bundle(SAMPLE_FILES)


@pytest.fixture
def make_bundle():
    """Build a bundle from raw entry contents."""
    return build_bundle


@pytest.fixture
def bundle_file(tmp_path, sample_bundle):
    """Write the sample bundle to a file and return its path."""
    path = tmp_path / "project.b64"
    path.write_text(sample_bundle, encoding="utf-8")
    return str(path)
