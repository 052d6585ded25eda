"""Tests for ruml.pipeline."""

from __future__ import annotations

from pathlib import Path

import pytest

from ruml.config import RumlConfig
from ruml.models import EntityKind
from ruml.parsers import SourceParseError
from ruml.pipeline import DiagramPipeline, generate_diagram
from tests._fixtures.source_tree import SourceTree


def _write_crate(source_tree: SourceTree) -> None:
    source_tree.write(
        {
            "models.rs": """
                pub struct User {
                    pub id: String,
                    pub profile: Profile,
                }

                impl User {
                    pub fn greet(&self, name: String) {}
                }
            """,
            "nested/profile.rs": """
                pub struct Profile {
                    pub bio: Option<String>,
                    pub role: Role,
                }

                pub enum Role {
                    Admin,
                }
            """,
        }
    )


def test_directory_run_resolves_edges_across_files(source_tree: SourceTree) -> None:
    _write_crate(source_tree)

    diagram = generate_diagram(source_tree.path())

    assert diagram == (
        "@startuml\n"
        "\n"
        'class "User" {\n'
        "    + id: String\n"
        "    + profile: Profile\n"
        "    + greet(name: String)\n"
        "}\n"
        "\n"
        'class "Profile" {\n'
        "    + bio: Option<String>\n"
        "    + role: Role\n"
        "}\n"
        '"User" <-- "Profile"\n'
        "\n"
        "\n"
        "\n"
        "@enduml"
    )


def test_include_enums_adds_enum_blocks_and_edges(source_tree: SourceTree) -> None:
    _write_crate(source_tree)
    config = RumlConfig(root=source_tree.path(), include_enums=True)

    diagram = DiagramPipeline(config=config).run(source_tree.path())

    assert 'enum "Role" {\n}' in diagram
    assert '"Profile" <-- "Role"\n' in diagram


def test_config_file_is_picked_up_from_input_directory(source_tree: SourceTree) -> None:
    _write_crate(source_tree)
    source_tree.write({".ruml.yml": "include_enums: true\nvisibility_markers: true\n"})

    entities = DiagramPipeline().collect_entities(source_tree.path())

    assert [entity.kind for entity in entities] == [
        EntityKind.STRUCT,
        EntityKind.STRUCT,
        EntityKind.ENUM,
    ]


def test_single_file_run_ignores_siblings(source_tree: SourceTree) -> None:
    _write_crate(source_tree)

    diagram = generate_diagram(source_tree.path("models.rs"))

    assert 'class "User"' in diagram
    assert 'class "Profile"' not in diagram
    assert "<--" not in diagram


def test_tuple_struct_does_not_abort_run(source_tree: SourceTree) -> None:
    source_tree.write(
        {
            "lib.rs": """
                pub struct Meters(f64);

                pub struct Point {
                    pub x: i32,
                }
            """
        }
    )

    diagram = generate_diagram(source_tree.path())

    assert 'class "Point" {\n    + x: i32\n}' in diagram
    assert "Meters" not in diagram


def test_newtype_field_has_no_edge_to_skipped_tuple_struct(source_tree: SourceTree) -> None:
    source_tree.write({"lib.rs": "pub struct Id(u64);\n\npub struct User {\n    pub id: Id,\n}\n"})

    diagram = generate_diagram(source_tree.path())

    assert "    + id: Id\n" in diagram
    assert 'class "Id"' not in diagram
    assert "<--" not in diagram


def test_unparseable_file_is_fatal(source_tree: SourceTree) -> None:
    source_tree.write({"lib.rs": "pub struct Broken {\n"})

    with pytest.raises(SourceParseError):
        generate_diagram(source_tree.path())


def test_empty_directory_renders_empty_document(source_tree: SourceTree) -> None:
    assert generate_diagram(source_tree.path()) == "@startuml\n\n\n\n@enduml"


def test_explicit_config_exclude_paths_are_applied(source_tree: SourceTree) -> None:
    source_tree.write(
        {
            "lib.rs": "pub struct User {\n    pub id: String,\n}\n",
            "gen/out.rs": "pub struct Generated {}\n",
        }
    )
    config = RumlConfig(root=source_tree.path(), exclude_paths=["gen/"])

    diagram = generate_diagram(source_tree.path(), config=config)

    assert 'class "User"' in diagram
    assert 'class "Generated"' not in diagram


def test_reused_pipeline_loads_config_per_input(tmp_path: Path) -> None:
    (tmp_path / "first").mkdir()
    (tmp_path / "second").mkdir()
    with_enums = SourceTree(tmp_path / "first")
    with_enums.write({".ruml.yml": "include_enums: true\n", "lib.rs": "pub enum Role { Admin }\n"})
    plain = SourceTree(tmp_path / "second")
    plain.write({"lib.rs": "pub enum Role { Admin }\n"})
    pipeline = DiagramPipeline()

    assert 'enum "Role"' in pipeline.run(with_enums.path())
    assert 'enum "Role"' not in pipeline.run(plain.path())
    assert pipeline.config is None
