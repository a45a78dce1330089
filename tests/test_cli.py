"""CLI behaviour tests."""

from __future__ import annotations

import pytest

from usermeta.cli import _build_parser, main

HELLO_MD5 = "5eb63bbbe01eeed093cb22bb8f5acdc3"


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--verbose", "generate", "meta.yml"]).verbose is True
    assert parser.parse_args(["generate", "meta.yml", "--verbose"]).verbose is True


def test_cli_accepts_quiet_and_rejects_combining_with_verbose(capsys: pytest.CaptureFixture[str]) -> None:
    parser = _build_parser()
    assert parser.parse_args(["generate", "meta.yml", "-q"]).quiet is True

    with pytest.raises(SystemExit) as excinfo:
        main(["-v", "generate", "meta.yml", "--quiet"])

    assert excinfo.value.code == 2
    assert "cannot be combined" in capsys.readouterr().err


def test_cli_generate_options() -> None:
    args = _build_parser().parse_args(
        ["generate", "meta.yml", "--comment-style", "none", "--no-block", "-o", "out.js"]
    )
    assert args.command == "generate"
    assert args.comment_style == "none"
    assert args.no_block is True
    assert args.output == "out.js"


def test_cli_generate_prints_block(workspace, capsys: pytest.CaptureFixture[str]) -> None:
    workspace.write(
        {
            "meta.yml": """
            name: Test
            version: "1.0"
            author: Alice
            """,
            ".usermeta.yml": "comment_style: none\n",
        }
    )

    main(["generate", str(workspace.path("meta.yml"))])

    assert capsys.readouterr().out == (
        "==UserScript==\n@name Test\n@version 1.0\n@author Alice\n==/UserScript==\n"
    )


def test_cli_generate_resolves_resources_from_config(workspace) -> None:
    workspace.write(
        {
            "meta.yml": """
            name: Test
            version: "1.0"
            author: Alice
            require:
              - id: lib.js
                hash: [auto, md5]
            """,
            ".usermeta.yml": """
            src_dir: dist
            url_base: https://cdn.example
            """,
            "dist/lib.js": b"hello world",
        }
    )
    output = workspace.path("header.js")

    main(["generate", str(workspace.path("meta.yml")), "--no-block", "-o", str(output)])

    assert output.read_text(encoding="utf-8") == (
        "/*\n@name Test\n@version 1.0\n@author Alice\n"
        f"@require https://cdn.example/lib.js#md5={HELLO_MD5}\n*/\n"
    )


def test_cli_generate_reports_validation_errors(workspace, capsys: pytest.CaptureFixture[str]) -> None:
    workspace.write({"meta.yml": "name: Test\nversion: '1.0'\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(workspace.path("meta.yml"))])

    assert excinfo.value.code == 1
    assert "missing required keys: author" in capsys.readouterr().err


def test_cli_hash_prints_fragment(workspace, capsys: pytest.CaptureFixture[str]) -> None:
    workspace.write({"lib.js": b"hello world"})
    main(["hash", str(workspace.path("lib.js")), "--algorithm", "md5"])
    assert capsys.readouterr().out.strip() == f"md5={HELLO_MD5}"


def test_cli_hash_missing_file(workspace) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["hash", str(workspace.path("missing.js"))])
    assert excinfo.value.code == 1


@pytest.mark.parametrize(
    "document",
    [
        "author: 123\n",
        "author: Alice\nrequire: [42]\n",
        "author: Alice\nlicense: 3\n",
    ],
)
def test_cli_generate_reports_wrongly_typed_metadata(
    workspace, capsys: pytest.CaptureFixture[str], document: str
) -> None:
    workspace.write({"meta.yml": "name: Test\nversion: '1.0'\n" + document})

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(workspace.path("meta.yml"))])

    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "usermeta generate failed:" in captured.err


def test_cli_quiet_hides_locale_warnings(workspace, capsys: pytest.CaptureFixture[str]) -> None:
    workspace.write(
        {
            "meta.yml": """
            name:
              "@": Test
              pt_br: Teste
            version: "1.0"
            author: Alice
            """,
            ".usermeta.yml": "comment_style: none\n",
        }
    )
    meta = str(workspace.path("meta.yml"))

    main(["generate", meta, "--no-block"])
    captured = capsys.readouterr()
    assert "@name:pt-BR Teste" in captured.out
    assert 'Locale "pt_br" has been resolved to "pt-BR".' in captured.err
    assert "resolved" not in captured.out

    main(["generate", meta, "--no-block", "--quiet"])
    captured = capsys.readouterr()
    assert "@name:pt-BR Teste" in captured.out
    assert captured.err == ""
