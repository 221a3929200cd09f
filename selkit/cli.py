# selkit/cli.py
from __future__ import annotations

"""Command-line interface
------------------------
Build a selector from fragment tokens, render selector definition files,
and view effective config.
"""

import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click

from selkit import __version__
from selkit.selectors.builder import SelectorBuilder, SelectorBuildError
from selkit.selectors.loader import (
    FragmentName,
    find_selector_files,
    load_selector_file,
    parse_fragment_name,
)
from selkit.utils.config import get_settings
from selkit.utils.logger import bind, get_logger, set_log_level, unbind


# -------- helpers --------


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=get_settings().JSON_INDENT, ensure_ascii=False))


def _resolve_paths(paths: List[str]) -> List[Path]:
    return [Path(p).resolve() for p in paths]


def _parse_token(token: str) -> Tuple[FragmentName, str]:
    if "=" not in token:
        raise click.BadParameter(f"expected KIND=VALUE, got {token!r}", param_hint="TOKENS")
    raw_kind, value = token.split("=", 1)
    try:
        return parse_fragment_name(raw_kind), value
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="TOKENS") from e


# -------- CLI root --------


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
@click.version_option(version=__version__, prog_name="selkit")
def cli(log_level: Optional[str]):
    _ = get_settings()
    if log_level:
        set_log_level(log_level.upper())


# -------- commands --------


@cli.command("config")
def cmd_config():
    """Print effective configuration (after .env & env vars)."""
    s = get_settings()
    _echo_json(s.model_dump(mode="json"))


@cli.command("build")
@click.argument("tokens", nargs=-1, required=True)
def cmd_build(tokens: Tuple[str, ...]):
    """
    Build a selector from KIND=VALUE tokens, applied in the order given.

    Examples:
      selkit build element=a 'attr=href$=".png"' pseudo-class=focus
      selkit build id=main class=container class=editable
    """
    steps = [_parse_token(t) for t in tokens]
    builder = SelectorBuilder()
    try:
        for name, value in steps:
            builder.add(name.kind, value)
    except SelectorBuildError as e:
        get_logger(__name__).debug(f"build rejected tokens {list(tokens)}")
        click.echo(f"ERR {e}")
        sys.exit(1)
    click.echo(builder.stringify())


@cli.command("render")
@click.argument("targets", nargs=-1, required=False)
@click.option(
    "--dir", "selectors_dir",
    type=click.Path(file_okay=False, dir_okay=True, exists=True),
    default=None,
    help="Render all selector files under this directory (defaults to SELECTORS_DIR)",
)
@click.option("--recursive/--no-recursive", default=True, show_default=True)
@click.option("--json-out", type=click.Path(dir_okay=False), default=None, help="Write rendered selectors to this JSON file")
def cmd_render(targets: List[str], selectors_dir: Optional[str], recursive: bool, json_out: Optional[str]):
    """Render selector definitions from files or a directory (supports multi-doc YAML)."""
    log = get_logger(__name__)

    paths: list[Path] = []
    if targets:
        for p in _resolve_paths(targets):
            if p.is_dir():
                paths.extend(find_selector_files(p, recursive=recursive))
            else:
                paths.append(p)
    else:
        root = Path(selectors_dir) if selectors_dir else get_settings().SELECTORS_DIR
        if not root.is_dir():
            click.echo("Provide file(s) or --dir to render.")
            sys.exit(2)
        paths.extend(find_selector_files(root, recursive=recursive))

    if not paths:
        click.echo("No selector files found.")
        sys.exit(2)

    ok = True
    rendered: list[dict] = []
    for fp in paths:
        bind(source=str(fp))
        try:
            for definition in load_selector_file(fp):
                selector = definition.render()
                rendered.append({"file": str(fp), "name": definition.name, "selector": selector})
                click.echo(f"OK  {fp}  ->  {definition.name}: {selector}")
        except (OSError, ValueError) as e:
            ok = False
            log.debug(f"render failed: {e}")
            click.echo(f"ERR {fp}  ->  {e}")
        finally:
            unbind("source")

    if json_out:
        outp = Path(json_out).resolve()
        outp.parent.mkdir(parents=True, exist_ok=True)
        outp.write_text(json.dumps({"selectors": rendered}, indent=get_settings().JSON_INDENT, ensure_ascii=False), encoding="utf-8")
        click.echo(f"Wrote summary: {outp}")

    sys.exit(0 if ok else 1)


def main() -> None:
    cli(prog_name="selkit")


if __name__ == "__main__":
    main()
