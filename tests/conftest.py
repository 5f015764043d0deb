"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from propfile.core.models import Property


@pytest.fixture
def demo_properties() -> list[Property]:
    """One grouped and one ungrouped property."""
    return [
        Property(name="db.host", description="Database host", default_value="localhost", group=["DB"]),
        Property(name="log.level", description="Root log level", default_value="INFO"),
    ]


@pytest.fixture
def descriptor_yml(tmp_path: Path) -> Path:
    """Create a valid propfile.yml in a temp directory."""
    content = textwrap.dedent("""\
        project: Demo
        group_order: [Server, Database]
        properties:
          - name: db.url
            description: JDBC url
            default_value: "jdbc:h2:mem:demo"
            group: [Database, Connection]
          - name: server.port
            description: |-
              Listening port.
              Must be free.
            default_value: "8080"
            override_value: "9090"
            group: Server
          - name: log.level
            default_value: INFO
          - name: secret.token
            include_in_output: false
    """)
    path = tmp_path / "propfile.yml"
    path.write_text(content)
    return path
