import pytest

from main import build_parser, main


def test_encode_decode(png_file, capsys):
    assert main(["encode", str(png_file), "RuSt", "secret message"]) == 0
    capsys.readouterr()

    assert main(["decode", str(png_file), "RuSt"]) == 0
    assert capsys.readouterr().out == "secret message\n"


def test_encode_output_path(png_file, tmp_path):
    output = tmp_path / "copy.png"
    assert main(["encode", str(png_file), "RuSt", "msg", str(output)]) == 0
    assert output.exists()


def test_remove(png_file, png_bytes, capsys):
    main(["encode", str(png_file), "RuSt", "secret message"])
    assert main(["remove", str(png_file), "RuSt"]) == 0
    assert "Removed RuSt chunk" in capsys.readouterr().out
    assert png_file.read_bytes() == png_bytes


def test_print(png_file, capsys):
    assert main(["print", str(png_file)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "PNG file, 3 chunks"
    assert "IHDR" in out and "IDAT" in out and "IEND" in out


def test_missing_chunk_exit_code(png_file, capsys):
    assert main(["decode", str(png_file), "RuSt"]) == 1
    assert capsys.readouterr().err == "Error: No RuSt chunk found\n"


def test_bad_type_exit_code(png_file, capsys):
    assert main(["encode", str(png_file), "Rust", "msg"]) == 1
    assert "third character must be uppercase" in capsys.readouterr().err


def test_missing_file_exit_code(tmp_path, capsys):
    assert main(["print", str(tmp_path / "nope.png")]) == 1
    assert capsys.readouterr().err.startswith("Error: ")


def test_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["decode", "only-a-path"])
    assert excinfo.value.code == 2


def test_subcommand_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_invalid_fetch_timeout_exit_code(monkeypatch, capsys):
    monkeypatch.setenv("PNGME_FETCH_TIMEOUT", "soon")
    assert main(["print", "https://example.com/logo.png"]) == 1
    assert "invalid PNGME_FETCH_TIMEOUT 'soon'" in capsys.readouterr().err
