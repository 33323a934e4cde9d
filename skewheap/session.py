"""
Text protocol session driving a SkewHeap.

Commands are read as whitespace-separated tokens, so a command may span
lines or share a line with others:

    CREAR 5
    INSERTAR 3
    MODIFICAR 2 I D P
    BORRAR
    MIN
    FIN

The first command must be ``CREAR <int>``. After every command the whole
heap is printed with ``SkewHeap.render()`` followed by a blank line (two
after the empty-heap marker).
"""

import logging
import sys
from typing import Iterable, Iterator, List, NamedTuple, Optional, TextIO

from .datastructures import EmptyHeapError, InvalidPathError, SkewHeap, SkewHeapError

logger = logging.getLogger(__name__)

# Protocol output
MSG_NOT_CREATE = "La primera instruccion del caso de prueba no es CREAR."
MSG_CREATED = "Monticulo creado."
MSG_INSERTED = "Se ha insertado {value} con exito."
MSG_DELETED = "Se ha eliminado el minimo con exito."
MSG_MIN = "El minimo del monticulo es {value}."
MSG_MODIFYING = "Se va a modificar el valor {old} por el valor {new}"
MSG_MODIFIED = "Valor modificado."
MSG_UNKNOWN = "Operacion no reconocida."
MSG_EMPTY = "El monticulo esta vacio."
MSG_BAD_PATH = "Camino no valido: {reason}"
MSG_BAD_ARGUMENT = "Argumento no valido: {token}"

END_OF_INPUT = "<fin de entrada>"
PATH_END = "P"


class ProtocolError(Exception):
    """Malformed command stream; ends the session."""

    def __init__(self, token: str) -> None:
        super().__init__(token)
        self.token = token


class SessionResult(NamedTuple):
    ok: bool
    heap: Optional[SkewHeap]
    commands: int


def tokenize(stream: Iterable[str]) -> Iterator[str]:
    """Yield whitespace-separated tokens from an iterable of lines."""
    for line in stream:
        yield from line.split()


class TokenStream:
    """Token iterator that can take back the unread tail of a token."""

    def __init__(self, tokens: Iterable[str]) -> None:
        self._tokens = iter(tokens)
        self._pending: List[str] = []

    def push_back(self, token: str) -> None:
        self._pending.append(token)

    def __iter__(self) -> "TokenStream":
        return self

    def __next__(self) -> str:
        if self._pending:
            return self._pending.pop()
        return next(self._tokens)


class Session:
    """One CREAR ... FIN run over a token stream."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self.out = out if out is not None else sys.stdout
        self.heap: Optional[SkewHeap] = None
        self.commands = 0
        self._handlers = {
            "INSERTAR": self._cmd_insert,
            "BORRAR": self._cmd_delete,
            "MIN": self._cmd_min,
            "MODIFICAR": self._cmd_modify,
        }

    # -----------------------------
    # Output helpers
    # -----------------------------
    def _emit(self, text: str = "") -> None:
        print(text, file=self.out)

    def _show(self) -> None:
        self._emit(self.heap.render())
        if self.heap.is_empty():
            # The empty marker carries its own line break in transcripts.
            self._emit()
        self._emit()

    # -----------------------------
    # Argument readers
    # -----------------------------
    @staticmethod
    def _read_int(tokens: TokenStream) -> int:
        token = next(tokens, None)
        if token is None:
            raise ProtocolError(END_OF_INPUT)
        try:
            return int(token)
        except ValueError:
            raise ProtocolError(token) from None

    @staticmethod
    def _read_path(tokens: TokenStream) -> List[str]:
        # Steps are single characters, so "I D P" and "IDP" read the same.
        path = []
        for token in tokens:
            for i, step in enumerate(token):
                if step == PATH_END:
                    if token[i + 1:]:
                        tokens.push_back(token[i + 1:])
                    return path
                path.append(step)
        raise ProtocolError(END_OF_INPUT)

    # -----------------------------
    # Command handlers
    # -----------------------------
    def _cmd_insert(self, tokens: TokenStream) -> None:
        value = self._read_int(tokens)
        self.heap.insert(value)
        self._emit(MSG_INSERTED.format(value=value))

    def _cmd_delete(self, tokens: TokenStream) -> None:
        self.heap.extract_min()
        self._emit(MSG_DELETED)

    def _cmd_min(self, tokens: TokenStream) -> None:
        self._emit(MSG_MIN.format(value=self.heap.peek_min()))

    def _cmd_modify(self, tokens: TokenStream) -> None:
        value = self._read_int(tokens)
        path = self._read_path(tokens)
        target = self.heap.navigate(path)
        self._emit(MSG_MODIFYING.format(old=target.key, new=value))
        self.heap.update_key(value, target)
        self._emit(MSG_MODIFIED)

    # -----------------------------
    # Driver
    # -----------------------------
    def _fail(self, exc: ProtocolError) -> SessionResult:
        logger.warning("protocol error at token %r", exc.token)
        self._emit(MSG_BAD_ARGUMENT.format(token=exc.token))
        return SessionResult(False, self.heap, self.commands)

    def run(self, tokens: Iterable[str]) -> SessionResult:
        """Execute commands until FIN, end of input or a protocol error."""
        tokens = TokenStream(tokens)
        first = next(tokens, None)
        if first != "CREAR":
            logger.warning("session started with %r instead of CREAR", first)
            self._emit(MSG_NOT_CREATE)
            return SessionResult(False, None, 0)

        try:
            value = self._read_int(tokens)
        except ProtocolError as exc:
            return self._fail(exc)
        self.heap = SkewHeap(value)
        self.commands = 1
        self._emit(MSG_CREATED)
        self._show()

        for op in tokens:
            if op == "FIN":
                break
            logger.debug("command %s", op)
            handler = self._handlers.get(op)
            try:
                if handler is None:
                    self._emit(MSG_UNKNOWN)
                else:
                    handler(tokens)
            except ProtocolError as exc:
                return self._fail(exc)
            except EmptyHeapError:
                self._emit(MSG_EMPTY)
            except InvalidPathError as exc:
                self._emit(MSG_BAD_PATH.format(reason=exc))
            except SkewHeapError as exc:
                self._emit(str(exc))
            self.commands += 1
            self._show()

        return SessionResult(True, self.heap, self.commands)


def run_session(stream: Iterable[str], out: Optional[TextIO] = None) -> SessionResult:
    """Tokenize *stream* (lines of text) and run one session over it."""
    return Session(out).run(tokenize(stream))
