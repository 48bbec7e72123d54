"""
CLI tests: main(argv) runs one analysis offline and prints JSON.
"""

from __future__ import annotations

import json

from main import main


def test_scan_url_offline(capsys):
    code = main(["--offline", "--no-delay", "scan-url", "https://google.com"])
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["status"] == "safe"
    assert out["source"] == "local"


def test_detect_bot_threat(capsys):
    code = main([
        "--offline", "--no-delay", "detect-bot",
        "--type", "TRANSFER", "--amount", "500000", "--old-balance", "500000", "--new-balance", "0",
    ])
    assert code == 0
    assert json.loads(capsys.readouterr().out)["status"] == "threat"


def test_detect_bot_unknown_type_exits_2(capsys):
    code = main([
        "--offline", "--no-delay", "detect-bot",
        "--type", "WIRE", "--amount", "5", "--old-balance", "10", "--new-balance", "5",
    ])
    assert code == 2
    assert capsys.readouterr().out == ""


def test_blank_url_prints_nothing(capsys):
    assert main(["--offline", "--no-delay", "scan-url", "   "]) == 0
    assert capsys.readouterr().out == ""


def test_quick_profile_flag(capsys):
    main(["--offline", "--no-delay", "--profile", "quick", "scan-url", "https://x.com/update-account"])
    assert json.loads(capsys.readouterr().out)["status"] == "warning"


def test_seeded_samples_repeat(capsys):
    main(["--offline", "--no-delay", "--seed", "11", "sample", "network", "--analyze"])
    first = json.loads(capsys.readouterr().out)
    main(["--offline", "--no-delay", "--seed", "11", "sample", "network", "--analyze"])
    second = json.loads(capsys.readouterr().out)
    assert first == second
    assert set(first) == {"sample", "verdict"}
    assert first["sample"]["srcIP"]


def test_unknown_profile_env_exits_2(capsys, monkeypatch):
    monkeypatch.setenv("THREATLENS_PROFILE", "paranoid")
    code = main(["--offline", "--no-delay", "scan-url", "https://google.com"])
    assert code == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "paranoid" in captured.err


def test_non_finite_amount_exits_2(capsys):
    code = main([
        "--offline", "--no-delay", "detect-bot",
        "--type", "PAYMENT", "--amount", "nan", "--old-balance", "10", "--new-balance", "5",
    ])
    assert code == 2
    assert capsys.readouterr().out == ""
