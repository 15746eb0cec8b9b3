from __future__ import annotations
import argparse, sys
from dataclasses import replace
from typing import List, Optional, Tuple

from .readers import parse_words, read_words, write_lines
from .decoder import DecodeError, ERROR_POLICIES, decode_program
from .diagnostics import Diagnostic, error, note
from .render import render

def disassemble_words(words: List[int], *, mode: str = "labelled", on_error: str = "abort",
                      filename: str | None = None) -> Tuple[List[str], List[Diagnostic]]:
    """Decodifica y renderiza. Con on_error='abort' una palabra inválida deja
    la salida vacía y un único diagnóstico de error."""
    try:
        dec = decode_program(words, on_error=on_error)
    except DecodeError as ex:
        return [], [error(ex.message, file=filename, index=ex.index, word=ex.word,
                          hint="use --on-error skip|placeholder para continuar")]
    diags = [replace(d, file=filename) for d in dec.diagnostics]
    if diags:
        diags.append(note(f"{len(diags)} palabra(s) no decodificada(s)", file=filename))
    return render(dec.program, mode), diags

def disassemble_text(text: str, *, mode: str = "labelled", on_error: str = "abort",
                     filename: str | None = None) -> Tuple[List[str], List[Diagnostic]]:
    """Lee, decodifica y renderiza. Devuelve (líneas, diagnostics_totales)."""
    words, diags_read = parse_words(text, filename=filename)
    if diags_read:
        return [], diags_read
    return disassemble_words(words, mode=mode, on_error=on_error, filename=filename)

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="RV32I disassembler with branch labels")
    ap.add_argument("source", help="archivo con una palabra hexadecimal por línea ('-' = stdin)")
    ap.add_argument("-o", "--output", help="archivo de salida (por defecto stdout)")
    g = ap.add_mutually_exclusive_group()
    g.add_argument("-l", "--labelled", dest="mode", action="store_const", const="labelled",
                   help="etiquetas L<i> en los destinos de saltos (por defecto)")
    g.add_argument("-u", "--unlabelled", dest="mode", action="store_const", const="unlabelled",
                   help="desplazamientos numéricos, sin etiquetas")
    ap.add_argument("--on-error", choices=ERROR_POLICIES, default="abort",
                    help="qué hacer con palabras inválidas (por defecto abort)")
    ap.set_defaults(mode="labelled")
    args = ap.parse_args(argv)

    src_name = "<stdin>" if args.source == "-" else args.source
    try:
        if args.source == "-":
            words, diags_read = parse_words(sys.stdin.read(), filename=src_name)
        else:
            words, diags_read = read_words(args.source)
    except OSError as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    for d in diags_read:
        print(d, file=sys.stderr)
    if diags_read:
        return 2

    lines, diags = disassemble_words(words, mode=args.mode, on_error=args.on_error,
                                     filename=src_name)

    had_error = False
    for d in diags:
        print(d, file=sys.stderr)
        if d.severity == "error":
            had_error = True

    if had_error:
        return 1

    if args.output is None:
        for line in lines:
            print(line)
        return 0

    try:
        write_lines(lines, args.output)
    except OSError as ex:
        print(f"ERROR al escribir salida: {ex}", file=sys.stderr)
        return 3
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
