from __future__ import annotations

import argparse
import io
import json

import pytest

from privx_cli.cli.commands import Command, CommandGroup, build_router
from privx_cli.cli.main import COMMAND_GROUPS, build_cli, main


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    monkeypatch.delenv("PRIVX_API_BASE_URL", raising=False)
    monkeypatch.delenv("PRIVX_API_TOKEN", raising=False)
    monkeypatch.setattr("privx_cli.cli.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.toml")


def test_version_json_has_expected_fields() -> None:
    out = io.StringIO()
    err = io.StringIO()

    rc = main(["version", "--json"], stdout=out, stderr=err)
    assert rc == 0
    assert err.getvalue() == ""

    payload = json.loads(out.getvalue())
    assert payload["cli"] == "privx-cli"
    assert isinstance(payload["version"], str)
    assert payload["base_url"] == "https://localhost"


def test_invalid_config_reports_config_error(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("timeout = -1\n", encoding="utf-8")
    out = io.StringIO()
    err = io.StringIO()

    rc = main(["--config", str(config_path), "roles"], stdout=out, stderr=err)

    assert rc == 1
    assert "config error: timeout must be greater than zero" in err.getvalue()


def test_verbose_logs_are_json_on_stderr(monkeypatch, tmp_path) -> None:
    class _Client:
        def __init__(self, **kwargs) -> None:  # noqa: ARG002
            pass

        def extender_config_download_handle(self, client_id):  # noqa: ARG002
            return {"session_id": "sess-1"}

        def download_extender_config(self, client_id, session_id, file_name):  # noqa: ARG002
            return file_name

    monkeypatch.setattr("privx_cli.cli.main.PrivXClient", _Client)
    out = io.StringIO()
    err = io.StringIO()

    rc = main(
        [
            "--verbose",
            "trusted-clients",
            "pre-config",
            "--client-id",
            "tc-1",
            "--type",
            "extender",
            "--name",
            str(tmp_path / "conf.toml"),
        ],
        stdout=out,
        stderr=err,
    )

    assert rc == 0
    records = [json.loads(line) for line in err.getvalue().splitlines()]
    assert records
    assert records[0]["level"] == "DEBUG"
    assert records[0]["logger"] == "privx_cli.trusted_clients"
    assert "tc-1" in records[0]["message"]
    assert "funcName" not in records[0]


def test_router_lists_both_groups() -> None:
    router = build_cli()
    args = router.parser.parse_args(["trusted-clients", "show", "--client-id", "x"])

    command = router.resolve(args)

    assert command is not None
    assert command.name == "show"
    assert [group.name for group in COMMAND_GROUPS] == ["roles", "trusted-clients"]


def test_router_is_built_from_explicit_groups() -> None:
    calls: list[str] = []

    def _run_ping(*, args, client, stdout, stderr) -> int:  # noqa: ARG001
        calls.append(args.target)
        return 0

    group = CommandGroup(
        name="ping",
        help="Ping",
        commands=(
            Command(
                "once",
                "Ping once",
                _run_ping,
                lambda parser: parser.add_argument("--target", required=True),
            ),
        ),
    )
    parser = argparse.ArgumentParser(prog="test")
    router = build_router(parser, parser.add_subparsers(dest="command", required=True), [group])

    args = router.parser.parse_args(["ping", "once", "--target", "host"])
    command = router.resolve(args)

    assert command is not None
    assert command.run(args=args, client=None, stdout=None, stderr=None) == 0
    assert calls == ["host"]
    with pytest.raises(SystemExit):
        router.parser.parse_args(["roles"])


def test_config_directory_reports_config_error(tmp_path) -> None:
    out = io.StringIO()
    err = io.StringIO()

    rc = main(["--config", str(tmp_path), "roles"], stdout=out, stderr=err)

    assert rc == 1
    assert err.getvalue().startswith("config error: cannot read config file")
