from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer

from karaoke_lyrics.config import FORMATS, load_config, save_config_format
from karaoke_lyrics.errors import DecodeError
from karaoke_lyrics.krc.container import decode_container, parse_lines
from karaoke_lyrics.krc.cipher import decipher
from karaoke_lyrics.krc.inflate import inflate_sync
from karaoke_lyrics.logging_setup import setup_logging
from karaoke_lyrics.lrc.charify import normalize_to_char_timed
from karaoke_lyrics.lrc.export import export_json, export_lines_json
from karaoke_lyrics.lrc.normalize import normalize_to_enhanced, normalize_to_standard

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, add_completion=False)

STREAMS = ("lyric", "crlyric", "tlyric", "rlyric")


def _emit(data: str, out: Path | None) -> None:
    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data)


@app.command()
def decode(
    krc_path: Path,
    stream: str = typer.Option("crlyric", "--stream", case_sensitive=False, help="lyric|crlyric|tlyric|rlyric"),
    json_output: bool = typer.Option(False, "--json", help="Print the whole bundle as JSON"),
    lines: bool = typer.Option(False, "--lines", help="Print per-character timing as JSON"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Decode a base64 KRC container file.
    """
    setup_logging(debug)
    cfg = load_config()
    stream_l = stream.lower()
    if stream_l not in STREAMS:
        raise typer.BadParameter(f"stream must be one of: {', '.join(STREAMS)}")

    raw = krc_path.read_text(encoding=cfg.encoding).strip()
    try:
        if lines:
            data = export_lines_json(parse_lines(inflate_sync(decipher(raw)))) if raw else "[]"
        else:
            bundle = asyncio.run(decode_container(raw, decode_entities=cfg.decode_entities))
            if not bundle.has_lyrics:
                logger.warning("%s decoded to an empty lyric", krc_path)
            data = export_json(bundle) if json_output else getattr(bundle, stream_l)
    except DecodeError as e:
        logger.debug("Decode failed for %s", krc_path, exc_info=True)
        typer.echo(f"No lyric: {e}", err=True)
        raise typer.Exit(code=2)

    _emit(data, out)


@app.command()
def normalize(
    lrc_path: Path,
    fmt: str | None = typer.Option(None, "--format", case_sensitive=False, help="enhanced|standard|char"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Normalize time-tagged lyric text to enhanced, standard or char-timed form."""
    setup_logging(debug)
    cfg = load_config()
    fmt_l = (fmt or cfg.default_format).lower()
    text = lrc_path.read_text(encoding=cfg.encoding)
    if fmt_l == "enhanced":
        data = normalize_to_enhanced(text)
    elif fmt_l == "standard":
        data = normalize_to_standard(text)
    elif fmt_l == "char":
        data = normalize_to_char_timed(text)
    else:
        raise typer.BadParameter(f"format must be one of: {', '.join(FORMATS)}")

    _emit(data, out)


@app.command()
def config(
    fmt: str | None = typer.Option(None, "--format", case_sensitive=False, help="Default format for `normalize`"),
):
    """Show or change the saved defaults."""
    if fmt is not None:
        try:
            save_config_format(fmt)
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e
    cfg = load_config()
    typer.echo(f"config_dir={cfg.config_dir}")
    typer.echo(f"format={cfg.default_format}")
    typer.echo(f"decode_entities={cfg.decode_entities}")
    typer.echo(f"encoding={cfg.encoding}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
