from __future__ import annotations

from pathlib import Path
import dataclasses
import json
import logging

import typer

from .config import DEFAULT_CONFIG_NAME, VALID_BITS, FingerprintConfig, load_config
from .fingerprinter import Fingerprinter
from .fnv import FingerprintHasher

app = typer.Typer(add_completion=False, no_args_is_help=True)

logger = logging.getLogger(__name__)


def _cfg(config: str, bits: int | None = None) -> FingerprintConfig:
    cfg = load_config(config)
    if bits is not None:
        if bits not in VALID_BITS:
            raise typer.BadParameter(f"--bits must be one of {VALID_BITS}")
        cfg = dataclasses.replace(cfg, bits=bits)
    logging.basicConfig(level=cfg.numeric_log_level, format="%(levelname)s %(name)s: %(message)s")
    return cfg


@app.command()
def init(out: str = typer.Option(DEFAULT_CONFIG_NAME, help="Write example config to this path")):
    """Write a starter config file."""
    outp = Path(out)
    outp.write_text("""[fingerprint]
# number of bytes read from the start offset of each file
byte_size = 255
offset = 0
# 32 or 64
bits = 64

[logging]
# can also be set with the FNVPRINT_LOG_LEVEL environment variable
level = "WARNING"
""", encoding="utf-8")
    typer.echo(f"Wrote {outp}")


@app.command(name="hash")
def hash_files(
    paths: list[Path] = typer.Argument(..., help="Files to fingerprint"),
    config: str = typer.Option(DEFAULT_CONFIG_NAME),
    offset: int = typer.Option(None, min=0, help="Override the configured start offset"),
    size: int = typer.Option(None, min=0, help="Fingerprint fewer bytes than the configured byte_size"),
    bits: int = typer.Option(None, help="Override the configured width (32 or 64)"),
):
    """Fingerprint the leading bytes of each file."""
    cfg = _cfg(config, bits)
    if offset is not None:
        cfg = dataclasses.replace(cfg, offset=offset)

    results = []
    failed = 0
    for path in paths:
        fp = Fingerprinter(path, cfg.offset, cfg.byte_size, bits=cfg.bits)
        try:
            fp.read_path()
        except OSError as e:
            logger.warning(f"Failed to open {path}: {e}")
            typer.echo(f"Error: cannot read {path}: {e}", err=True)
            failed += 1
            continue
        fp.add_size(size)
        record = {"path": str(path), **fp.to_struct().to_dict(), "bits": cfg.bits}
        fp.clear()
        results.append(record)

    typer.echo(json.dumps(results, indent=2))
    if failed:
        raise typer.Exit(code=1)


@app.command()
def text(
    value: str,
    length: int = typer.Option(None, help="Only fold the first LENGTH bytes"),
    bits: int = typer.Option(None, help="Override the configured width (32 or 64)"),
    config: str = typer.Option(DEFAULT_CONFIG_NAME),
):
    """Fingerprint the UTF-8 bytes of a literal string."""
    cfg = _cfg(config, bits)
    with FingerprintHasher(value.encode("utf-8")) as hasher:
        result = hasher.fnv1a32(length) if cfg.bits == 32 else hasher.fnv1a64(length)
    typer.echo(str(result))


if __name__ == "__main__":
    app()
