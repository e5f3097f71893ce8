from __future__ import annotations

import json

import pytest

from privx_cli.cli.inputs import InputError, load_json_body
from privx_cli.models import RoleDefinition, RoleUpdate


def test_unknown_role_fields_pass_through(tmp_path) -> None:
    path = tmp_path / "role.json"
    path.write_text(json.dumps({"name": "ops", "source_rules": {"type": "GROUP"}}), encoding="utf-8")

    assert load_json_body(path, RoleDefinition) == {"name": "ops", "source_rules": {"type": "GROUP"}}


def test_update_body_does_not_require_name(tmp_path) -> None:
    path = tmp_path / "role.json"
    path.write_text(json.dumps({"comment": "c"}), encoding="utf-8")

    assert load_json_body(path, RoleUpdate) == {"comment": "c"}


def test_missing_file_raises_input_error(tmp_path) -> None:
    with pytest.raises(InputError, match="cannot read input file"):
        load_json_body(tmp_path / "absent.json", RoleDefinition)


def test_non_object_json_raises_input_error(tmp_path) -> None:
    path = tmp_path / "role.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(InputError, match="must contain a JSON object"):
        load_json_body(path, RoleDefinition)


def test_empty_name_is_rejected(tmp_path) -> None:
    path = tmp_path / "role.json"
    path.write_text(json.dumps({"name": ""}), encoding="utf-8")

    with pytest.raises(InputError, match="name"):
        load_json_body(path, RoleDefinition)
