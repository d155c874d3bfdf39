import json

import pytest

from cancellation_resolver import __main__ as cli
from cancellation_resolver.executor import CancellationExecutor

pytestmark = pytest.mark.unit


@pytest.fixture
def patched_executor(monkeypatch, make_backend, netflix_payload):
    """Route the CLI through a fake backend instead of HTTP clients."""

    def _create(config):
        return CancellationExecutor(config, backend=make_backend(netflix_payload))

    monkeypatch.setattr("cancellation_resolver.handler.create_executor", _create)


def test_target_is_required(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2


def test_page_and_service_are_mutually_exclusive():
    with pytest.raises(SystemExit):
        cli.main(["--page-id", "p", "--service", "Netflix"])


@pytest.mark.usefixtures("patched_executor")
def test_service_resolution_prints_envelope(monkeypatch, capsys, hf_token):
    monkeypatch.setenv("HF_TOKEN", hf_token)

    code = cli.main(["--service", "Netflix", "--no-write"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["cancellationLink"] == "https://www.netflix.com/cancelplan"
    assert out["written"] is False


def test_missing_credentials_exit_1(capsys):
    code = cli.main(["--service", "Netflix"])
    assert code == 1
    out = json.loads(capsys.readouterr().out)
    assert out["kind"] == "MisconfigurationError"


@pytest.mark.usefixtures("patched_executor")
def test_env_file_supplies_credentials(tmp_path, capsys, hf_token):
    env_file = tmp_path / "resolver.env"
    env_file.write_text(f"HF_API_KEY={hf_token}\n", encoding="utf-8")

    code = cli.main(["--service", "Netflix", "--env-file", str(env_file)])

    assert code == 0
    assert json.loads(capsys.readouterr().out)["service"] == "Netflix"


def test_missing_env_file_exit_1(tmp_path, capsys):
    code = cli.main(["--service", "Netflix", "--env-file", str(tmp_path / "none.env")])
    assert code == 1
    assert "not found" in json.loads(capsys.readouterr().out)["error"]
