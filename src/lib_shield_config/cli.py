"""CLI adapter for ``lib_shield_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators inspect what a shield would show for an entity without running
the host extension: resolve placeholders and the merged native configuration,
read open counters, and try rotation policies.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_resolve` – resolves one presentation and prints JSON.
* :func:`cli_count` – prints today's open count for an entity key.
* :func:`cli_pick` – shows which element a rotation policy picks.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It builds a store, calls the composition
root (:class:`lib_shield_config.core.ShieldResolver`), and never reaches into
the resolver internals directly.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.file_loaders.structured import load_document_file
from .adapters.stores.json_file import JsonFileStore
from .adapters.stores.memory import InMemoryStore
from .application.counter import OpenCounter
from .application.placeholders import render_template
from .application.ports import KeyValueStore
from .core import ShieldResolver, load_settings
from .domain.config import parse_document
from .domain.entities import ActivityCategory, Application, Entity, WebDomain
from .domain.rotation import pick
from .domain.settings import EngineSettings

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_PROG_NAME: Final[str] = "lib_shield_config"


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version(_PROG_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Shield message, icon, and placeholder resolver",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_PROG_NAME,
    message="lib_shield_config version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_PROG_NAME)
    except metadata.PackageNotFoundError:
        click.echo(f"{_PROG_NAME} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _PROG_NAME)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("resolve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--store",
    "store_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="JSON store shared with the host (defaults to LIB_SHIELD_CONFIG_STORE__PATH, else in-memory)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, exists=True, dir_okay=False, readable=True),
    default=None,
    help="Configuration document (TOML/JSON/YAML) used instead of the stored shield.config.v1",
)
@click.option("--bundle-id", default=None, help="Application bundle identifier")
@click.option("--app-name", default=None, help="Application display name")
@click.option("--app-token", default=None, help="Opaque application token")
@click.option("--domain", default=None, help="Web domain being shielded")
@click.option("--domain-token", default=None, help="Opaque web domain token")
@click.option("--category-token", default=None, help="Opaque activity category token")
@click.option("--category-name", default=None, help="Activity category display name")
@click.option(
    "--bump/--no-bump",
    default=True,
    show_default=True,
    help="Count this resolution as a shield presentation",
)
@click.option(
    "--template",
    "templates",
    multiple=True,
    help="Template rendered with the resolved placeholders (repeatable)",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_resolve(
    store_path: Optional[Path],
    config_path: Optional[Path],
    bundle_id: Optional[str],
    app_name: Optional[str],
    app_token: Optional[str],
    domain: Optional[str],
    domain_token: Optional[str],
    category_token: Optional[str],
    category_name: Optional[str],
    bump: bool,
    templates: Sequence[str],
    indent: Optional[int],
) -> None:
    """Resolve one shield presentation and print placeholders and config as JSON.

    Passing ``--domain`` or ``--domain-token`` resolves a web domain; otherwise
    the application options are used. A category is attached when either
    category option is supplied.
    """

    settings = load_settings()
    entity = _build_entity(bundle_id, app_name, app_token, domain, domain_token)
    category = None
    if category_token is not None or category_name is not None:
        category = ActivityCategory(token=category_token, localized_display_name=category_name)

    store = _open_store(store_path, settings)
    document_loader = None
    if config_path is not None:
        document = parse_document(load_document_file(str(config_path)))
        document_loader = lambda: document  # noqa: E731

    resolver = ShieldResolver(store, settings=settings, document_loader=document_loader)
    resolution = resolver.resolve(entity, category) if bump else resolver.preview(entity, category)

    payload: dict[str, object] = {
        "entityKey": resolution.entity_key,
        "openCount": resolution.open_count,
        "placeholders": resolution.placeholders,
        "config": dict(resolution.config) if resolution.config is not None else None,
    }
    if templates:
        payload["rendered"] = [render_template(text, resolution.placeholders) for text in templates]
    click.echo(json.dumps(payload, indent=indent, sort_keys=True, ensure_ascii=False))


@cli.command("count", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("entity_key")
@click.option(
    "--store",
    "store_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="JSON store shared with the host (defaults to LIB_SHIELD_CONFIG_STORE__PATH)",
)
def cli_count(entity_key: str, store_path: Optional[Path]) -> None:
    """Print today's open count for ENTITY_KEY (e.g. ``app:com.example``)."""

    settings = load_settings()
    store = _open_store(store_path, settings)
    click.echo(str(OpenCounter(store, debounce_seconds=settings.debounce_seconds).current(entity_key)))


@cli.command("pick", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("items", nargs=-1)
@click.option("--open-count", type=int, required=True, help="1-based presentation count")
@click.option(
    "--loop/--clamp",
    default=True,
    show_default=True,
    help="Cycle through ITEMS or stick on the last one",
)
def cli_pick(items: Sequence[str], open_count: int, loop: bool) -> None:
    """Print the element of ITEMS shown for --open-count; prints nothing for no ITEMS.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> CliRunner().invoke(cli, ["pick", "--open-count", "3", "a", "b"]).output.strip()
    'a'
    """

    chosen = pick(list(items), open_count, loop)
    if chosen is not None:
        click.echo(chosen)


def _build_entity(
    bundle_id: Optional[str],
    app_name: Optional[str],
    app_token: Optional[str],
    domain: Optional[str],
    domain_token: Optional[str],
) -> Entity:
    """Return the entity described by the CLI options."""

    wants_domain = domain is not None or domain_token is not None
    wants_app = bundle_id is not None or app_name is not None or app_token is not None
    if wants_domain and wants_app:
        raise click.BadParameter(
            "Pass either application options or web domain options, not both.",
            param_hint="--domain",
        )
    if wants_domain:
        return WebDomain(token=domain_token, domain=domain)
    return Application(token=app_token, bundle_identifier=bundle_id, localized_display_name=app_name)


def _open_store(store_path: Optional[Path], settings: EngineSettings) -> KeyValueStore:
    """Open the JSON store at *store_path* or the configured path, else an in-memory store."""

    if store_path is not None:
        return JsonFileStore(store_path)
    if settings.store_path:
        return JsonFileStore(settings.store_path)
    return InMemoryStore()


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_PROG_NAME,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
