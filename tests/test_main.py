import pytest

import main as cli
from pginit.config import Config
from pginit.tips import render_tips


def test_help_lists_overrides_and_exits_zero(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--help"])

    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    for name in ("POSTGRES_UID", "POSTGRES_GID", "CERT_SUBJECT", "CERT_DAYS", "CERTS_DIR", "DATA_DIR", "CERT_SAN"):
        assert name in out
    assert "36500" in out
    assert "DNS:localhost,IP:127.0.0.1" in out


def test_help_runs_before_anything_else(monkeypatch, capsys):
    monkeypatch.setattr(cli, "run_provisioner", lambda *a, **k: pytest.fail("provisioner ran"))

    with pytest.raises(SystemExit):
        cli.main(["-h"])


def test_bad_config_exits_nonzero(monkeypatch, capsys):
    monkeypatch.setenv("CERT_DAYS", "forever")

    rc = cli.main([])

    assert rc == 2
    assert "CERT_DAYS must be an integer" in capsys.readouterr().err


def test_tips_printed_on_success(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("CERTS_DIR", str(tmp_path / "certs"))
    monkeypatch.setattr(cli, "run_provisioner", lambda config: 0)

    assert cli.main([]) == 0
    assert "ssl_cert_file = 'cert.pem'" in capsys.readouterr().out


def test_no_tips_flag(monkeypatch, capsys):
    monkeypatch.setattr(cli, "run_provisioner", lambda config: 0)

    assert cli.main(["--no-tips"]) == 0
    assert "Tips:" not in capsys.readouterr().out


def test_failure_exit_code_is_passed_through(monkeypatch, capsys):
    monkeypatch.setattr(cli, "run_provisioner", lambda config: 1)

    assert cli.main([]) == 1
    assert "Tips:" not in capsys.readouterr().out


def test_tips_mention_configured_uid_and_tls_keys():
    tips = render_tips(Config(uid=999))

    assert "this run used 999" in tips
    assert "ssl = on" in tips
    assert "ssl_key_file  = 'key.pem'" in tips
    assert "./certs/cert.pem -> /var/lib/postgresql/cert.pem:ro" in tips
