import re

import pytest

from otp_core import decode_secret
from otp_core.otp_cli import main

from .conftest import RFC_SECRET_B32, RFC_SECRET_B64


def test_secret_defaults_to_base32(capsys):
    assert main(["secret"]) == 0
    out = capsys.readouterr().out.strip()
    assert re.fullmatch(r"[A-Z2-7]{32}", out)


def test_secret_base64(capsys):
    assert main(["secret", "--format", "base64", "--bytes", "32"]) == 0
    out = capsys.readouterr().out.strip()
    assert len(decode_secret(out, "base64")) == 32


def test_secret_rejects_binary_format():
    with pytest.raises(SystemExit) as excinfo:
        main(["secret", "--format", "binary"])
    assert excinfo.value.code == 2


def test_hotp(capsys):
    assert main(["hotp", "--secret", RFC_SECRET_B32, "--counter", "1"]) == 0
    assert capsys.readouterr().out.strip() == "HOTP(counter=1): 287082"


def test_hotp_base64_ten_digits(capsys):
    argv = ["hotp", "--secret", RFC_SECRET_B64, "--format", "base64",
            "--counter", "2", "--digits", "10"]
    assert main(argv) == 0
    assert capsys.readouterr().out.strip() == "HOTP(counter=2): 0137359152"


def test_totp_with_timestamp(capsys):
    argv = ["totp", "--secret", RFC_SECRET_B32, "--digits", "8", "--timestamp", "59"]
    assert main(argv) == 0
    assert capsys.readouterr().out.strip() == "TOTP: 94287082  (valid ~ 1s)"


def test_interval(capsys):
    assert main(["interval", "--timestamp", "1554067403"]) == 0
    assert capsys.readouterr().out.strip() == "51802246"


def test_verify_hotp_reports_next_counter(capsys):
    argv = ["verify", "hotp", "--secret", RFC_SECRET_B32, "--code", "969429",
            "--counter", "1", "--look-ahead", "3"]
    assert main(argv) == 0
    assert "next counter = 4" in capsys.readouterr().out


def test_verify_hotp_invalid(capsys):
    argv = ["verify", "hotp", "--secret", RFC_SECRET_B32, "--code", "969429", "--counter", "1"]
    assert main(argv) == 1
    assert "INVALID" in capsys.readouterr().out


@pytest.mark.parametrize("extra, expected", [
    ([], 1),
    (["--past", "1"], 0),
    (["--past", "1", "--full-scan"], 0),
])
def test_verify_totp(capsys, extra, expected):
    argv = ["verify", "totp", "--secret", RFC_SECRET_B32, "--code", "94287082",
            "--digits", "8", "--timestamp", "89"] + extra
    assert main(argv) == expected


def test_bad_secret_exits_with_usage_error(capsys):
    argv = ["hotp", "--secret", "not_base32", "--counter", "0"]
    assert main(argv) == 2
    assert "base32" in capsys.readouterr().err


def test_bad_option_exits_with_usage_error(capsys):
    argv = ["interval", "--period", "0"]
    assert main(argv) == 2
    assert "interval_seconds" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().out
