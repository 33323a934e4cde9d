import csv
import io
import logging
import os
import sys

# Ensure we can import from the project
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from skewheap.cli import build_parser, configure_logging, main


def test_sort_prints_sorted_values(capsys):
    assert main(["sort", "5", "3", "8", "1", "3"]) == 0
    assert capsys.readouterr().out == "1 3 3 5 8\n"


def test_run_from_files(tmp_path):
    src = tmp_path / "session.txt"
    dst = tmp_path / "transcript.txt"
    src.write_text("CREAR 5\nINSERTAR 3\nMIN\nFIN\n", encoding="utf-8")
    assert main(["run", "--input", str(src), "--output", str(dst)]) == 0
    text = dst.read_text(encoding="utf-8")
    assert text.startswith("Monticulo creado.\n")
    assert "El minimo del monticulo es 3." in text


def test_run_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("INSERTAR 4\n"))
    assert main(["--log-level", "ERROR", "run"]) == 1
    assert "no es CREAR" in capsys.readouterr().out


def test_bench_writes_csv(tmp_path, capsys):
    path = tmp_path / "bench.csv"
    rc = main(["bench", "--output", str(path), "--base", "4", "--steps", "2",
               "--iterations", "2", "--seed", "3"])
    assert rc == 0
    with open(path, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0][0] == "Input Size"
    assert len(rows) == 1 + 4 * 2
    assert "Benchmark completed" in capsys.readouterr().out


def test_parser_defaults():
    args = build_parser().parse_args(["run"])
    assert args.log_level == "WARNING"
    assert args.input is None


def test_configure_logging_is_idempotent():
    logger = configure_logging(logging.INFO)
    count = len(logger.handlers)
    configure_logging(logging.DEBUG)
    assert len(logger.handlers) == count
    assert logger.level == logging.DEBUG
    configure_logging(logging.WARNING)
