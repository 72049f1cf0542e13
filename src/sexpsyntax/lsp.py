"""Minimal LSP server for sexpsyntax — diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from sexpsyntax import __version__
from sexpsyntax.errors import ErrorCode
from sexpsyntax.parser import parse
from sexpsyntax.results import SyntaxFailure

server = LanguageServer(
    "sexpsyntax-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


# Unterminated tokens end one past the last character of the text; every
# other failure ends on the character it points at.
_EXCLUSIVE_END = frozenset(
    {ErrorCode.UNTERMINATED_STRING, ErrorCode.UNTERMINATED_MULTI_LINE_COMMENT}
)


def to_diagnostic(failure: SyntaxFailure) -> Diagnostic:
    """Convert a failure into an LSP diagnostic (positions are already 0-based)."""
    end_character = failure.end.column
    if failure.error_code not in _EXCLUSIVE_END:
        end_character += 1
    return Diagnostic(
        range=Range(
            start=Position(line=failure.start.line, character=failure.start.column),
            end=Position(line=failure.end.line, character=end_character),
        ),
        message=failure.summary,
        severity=DiagnosticSeverity.Error,
        code=int(failure.error_code),
        source="sexpsyntax",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    result = parse(doc.source)
    if not result.ok:
        diagnostics.append(to_diagnostic(result))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
