from __future__ import annotations

from pathlib import Path

import typer

from inibind.cli.utils.files import ensure_dir, write_file

DEFAULT_CONFIG_TOML = """\
[load]
# TOC collection name; `-a/--toc` overrides it
# root = "conf"

# declare collections globally even when --local is passed
global_scope = false

# shell | json
format = "shell"

[load.scanner]
encoding = "utf-8"
# whole-line comments
comment_prefixes = [";", "#"]
# only recognised after whitespace: `key = value ; note`
inline_comment_prefixes = [";"]
"""


def init_cmd(
    path: Path = typer.Argument(Path("."), help="Directory to initialize."),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files."),
) -> None:
    """Write a default .inibind/config.toml."""
    root = path.resolve()
    cfg_dir = root / ".inibind"
    ensure_dir(cfg_dir)

    target = cfg_dir / "config.toml"
    if not write_file(target, DEFAULT_CONFIG_TOML, force=force):
        typer.echo(f"Kept existing {target} (use --force to overwrite)")
        return

    typer.echo(f"Initialized {cfg_dir}")
