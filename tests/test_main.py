"""
Test the command line
"""

import json

from main import main


def write_files(tmp_path, cfg, params):
    configfile = tmp_path / "config.json"
    configfile.write_text(json.dumps(cfg))
    paramsfile = tmp_path / "params.json"
    paramsfile.write_text(params)
    return str(configfile), str(paramsfile)


def test_get(tmp_path, capsys) -> None:
    configfile, paramsfile = write_files(tmp_path, {}, '{"p": "a b"}')
    ret = main(
        [
            "--configfile",
            configfile,
            "--url",
            "https://ya.ru/api",
            "--params",
            paramsfile,
        ]
    )
    assert ret == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "GET https://ya.ru/api?p=a%20b"


def test_post_with_host_key(tmp_path, capsys) -> None:
    configfile, paramsfile = write_files(
        tmp_path,
        {"hosts": {"money": "//ya.ru"}, "nonfinite_floats": "convert"},
        '{"b": Infinity, "a": [true, 2]}',
    )
    ret = main(
        [
            "--configfile",
            configfile,
            "--method",
            "post",
            "--host-key",
            "money",
            "--path",
            "/api",
            "--params",
            paramsfile,
        ]
    )
    assert ret == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "POST https://ya.ru/api"
    assert (
        "Content-Type: application/x-www-form-urlencoded; charset=utf-8"
        in lines
    )
    assert lines[-1] == "a%5B%5D=true&a%5B%5D=2&b=inf"


def test_errors(tmp_path) -> None:
    configfile, paramsfile = write_files(tmp_path, {}, '{"b": NaN}')
    base = ["--configfile", configfile, "--params", paramsfile]
    assert main(base + ["--host-key", "money"]) == 1
    assert main(base + ["--url", "https://ya.ru"]) == 1
    assert main(base + ["--url", "https://ya.ru", "--method", "FETCH"]) == 1
