"""
CLI command for version detection.

Thin wrapper over ``toolpin.core.services.version_detect``.
"""

from __future__ import annotations

import asyncio
import json
import sys

import click

from toolpin.core.errors import ToolpinError


@click.command("detect")
@click.argument("tool_id")
@click.option("--version", "forced", default=None, help="Explicit version; skips detection.")
@click.option(
    "--satisfies",
    "candidate",
    default=None,
    help="Exit 1 unless this concrete version (e.g. the installed one) matches.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(
    ctx: click.Context,
    tool_id: str,
    forced: str | None,
    candidate: str | None,
    as_json: bool,
) -> None:
    """Show which version of TOOL_ID is active here, and why."""
    from toolpin.core.context import Workspace
    from toolpin.core.models.version import UnresolvedVersionSpec
    from toolpin.core.services.version_detect import detect_version, publish_detected_from
    from toolpin.core.tool import Tool

    try:
        forced_version = UnresolvedVersionSpec.parse(forced) if forced else None
        tool = Tool.load(tool_id, Workspace())
        detected = asyncio.run(detect_version(tool, forced_version))
    except ToolpinError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    publish_detected_from(detected)
    satisfied = detected.version.matches(candidate) if candidate else None

    if as_json:
        data = detected.to_dict()
        if candidate:
            data["satisfies"] = {"candidate": candidate, "ok": satisfied}
        click.echo(json.dumps(data, indent=2))
        if satisfied is False:
            sys.exit(1)
        return

    click.echo(str(detected.version))

    if not ctx.obj.get("quiet", False):
        if detected.path is not None:
            where = str(detected.path)
        elif detected.env_var:
            where = f"${detected.env_var}"
        else:
            where = "command line"
        click.secho(f"   ↳ {detected.source.value}: {where}", fg="cyan", err=True)

    if satisfied is False:
        hint = " (aliases need a release registry)" if detected.version.is_alias else ""
        click.secho(f"❌ {candidate} does not satisfy {detected.version}{hint}", fg="red", err=True)
        sys.exit(1)
