import io
import logging
import os
import sys

# Ensure we can import from the project
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from skewheap.session import (
    MSG_EMPTY,
    MSG_NOT_CREATE,
    MSG_UNKNOWN,
    Session,
    run_session,
    tokenize,
)


def run(text):
    out = io.StringIO()
    result = run_session(io.StringIO(text), out)
    return result, out.getvalue()


def test_tokenize_splits_across_lines():
    assert list(tokenize(["CREAR 5", "", "  MODIFICAR 2 I\n", "P FIN"])) == [
        "CREAR", "5", "MODIFICAR", "2", "I", "P", "FIN",
    ]


def test_exact_transcript():
    result, out = run("CREAR 5\nINSERTAR 3\nFIN\n")
    assert result.ok
    assert result.commands == 2
    assert out == (
        "Monticulo creado.\n"
        "RAIZ(5)\n"
        "\n"
        "Se ha insertado 3 con exito.\n"
        "RAIZ(3) IZQ(3) [RAIZ(5)]\n"
        "\n"
    )


def test_min_and_delete_scenario():
    result, out = run("CREAR 5 INSERTAR 3 INSERTAR 8 INSERTAR 1 MIN BORRAR MIN FIN")
    assert result.ok
    assert "El minimo del monticulo es 1." in out
    assert "Se ha eliminado el minimo con exito." in out
    assert "El minimo del monticulo es 3." in out
    assert result.heap.peek_min() == 3
    assert result.commands == 7


def test_first_command_must_be_create():
    result, out = run("INSERTAR 3\nFIN\n")
    assert not result.ok
    assert result.heap is None
    assert out == MSG_NOT_CREATE + "\n"

    result, out = run("")
    assert not result.ok
    assert out == MSG_NOT_CREATE + "\n"


def test_unknown_operation_continues():
    result, out = run("CREAR 1 FOO INSERTAR 0 FIN")
    assert result.ok
    assert MSG_UNKNOWN in out
    assert result.heap.peek_min() == 0


def test_empty_heap_is_reported():
    result, out = run("CREAR 1 BORRAR BORRAR MIN FIN")
    assert "Se ha eliminado el minimo con exito.\nMonticulo vacio\n\n\n" in out
    assert result.ok
    assert "Monticulo vacio" in out
    assert out.count(MSG_EMPTY) == 2
    assert result.heap.is_empty()


def test_modify_uses_real_right_child():
    # CREAR 5, INSERTAR 3, INSERTAR 8 lays out RAIZ(3) IZQ [8] DER [5].
    result, out = run("CREAR 5 INSERTAR 3 INSERTAR 8 MODIFICAR 1 D P FIN")
    assert result.ok
    assert "Se va a modificar el valor 5 por el valor 1" in out
    assert "Valor modificado." in out
    assert sorted(result.heap) == [1, 3, 8]
    assert out.rstrip().endswith("RAIZ(1) IZQ(1) [RAIZ(3) IZQ(3) [RAIZ(8)]]")


def test_modify_path_glued_into_one_token():
    result, out = run("CREAR 5 INSERTAR 3 INSERTAR 8 MODIFICAR 1 DP MIN FIN")
    assert result.ok
    assert "Se va a modificar el valor 5 por el valor 1" in out
    assert "El minimo del monticulo es 1." in out
    assert sorted(result.heap) == [1, 3, 8]

    # Whatever follows P in the same token is read as the next command.
    result, out = run("CREAR 5 INSERTAR 3 MODIFICAR 0 IPMIN FIN")
    assert result.ok
    assert "El minimo del monticulo es 0." in out


def test_modify_bad_path_continues():
    result, out = run("CREAR 5 MODIFICAR 1 I P MIN FIN")
    assert result.ok
    assert "Camino no valido" in out
    assert "El minimo del monticulo es 5." in out


def test_protocol_errors_end_session():
    result, out = run("CREAR 5 INSERTAR x INSERTAR 1")
    assert not result.ok
    assert "Argumento no valido: x" in out
    assert result.heap.peek_min() == 5

    result, out = run("CREAR")
    assert not result.ok
    assert "Argumento no valido: <fin de entrada>" in out

    result, out = run("CREAR 5 MODIFICAR 1 I")
    assert not result.ok


def test_end_of_input_without_fin():
    result, _ = run("CREAR 2 INSERTAR 4")
    assert result.ok
    assert sorted(result.heap) == [2, 4]


def test_bad_start_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="skewheap.session"):
        Session(io.StringIO()).run(["BORRAR"])
    assert "instead of CREAR" in caplog.text
