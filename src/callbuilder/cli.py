"""Typer CLI entrypoints."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from callbuilder.config import Settings, load_settings
from callbuilder.descriptions import Parameter
from callbuilder.errors import InferenceError
from callbuilder.fields import MethodPlan, plan_method
from callbuilder.formats.json import from_json, to_json
from callbuilder.formats.text import parse_type
from callbuilder.logging_utils import configure_logging
from callbuilder.styles import BUILTIN_STYLES
from callbuilder.unification.inference import Indeterminate

app = typer.Typer(
    name="callbuilder",
    help="Infer builder field types for accumulator styles",
    add_completion=False,
)


def _settings(log_filter: str | None, *, strict: bool) -> Settings:
    # An unset flag leaves CALLBUILDER_STRICT in charge.
    settings = load_settings(log_filter=log_filter, strict=strict or None)
    try:
        configure_logging(settings)
    except ValueError as exc:
        typer.echo(f"invalid log filter {settings.log_filter!r}: {exc}", err=True)
        raise typer.Exit(2) from exc
    return settings


def _echo_plan(plan: MethodPlan, settings: Settings) -> None:
    typer.echo(f"{plan.name}:")
    for field in plan.fields:
        style = f" ({field.info.style.name})" if field.info.style else ""
        if isinstance(field.field_type, Indeterminate):
            typer.echo(f"  {field.name}{style}: <indeterminate>")
            if settings.render_failures:
                typer.echo(f"    {field.field_type}")
            continue
        typer.echo(f"  {field.name}{style}: {field.field_type}")
        for modifier in field.modifiers:
            if isinstance(modifier.parameter_types, Indeterminate):
                typer.echo(f"    {modifier.method_name}: <skipped>")
                if settings.render_failures:
                    typer.echo(f"      {modifier.parameter_types}")
                continue
            params = ", ".join(
                f"{t} {n}"
                for t, n in zip(
                    modifier.parameter_types,
                    modifier.parameter_names,
                    strict=True,
                )
            )
            typer.echo(f"    {modifier.method_name}({params})")


def _exit_code(plans: list[MethodPlan], failures: int, settings: Settings) -> int:
    if failures:
        return 1
    if settings.strict and any(plan.indeterminate for plan in plans):
        return 1
    return 0


@app.command()
def styles() -> None:
    """List the built-in accumulator styles."""
    for style in BUILTIN_STYLES.values():
        typer.echo(f"{style.name}:")
        for operation in style.operations():
            typer.echo(f"  {operation}")


@app.command()
def infer(
    style: Annotated[str, typer.Argument(help="Name of a built-in style")],
    consumer_type: Annotated[str, typer.Argument(help="Type the parameter expects")],
    name: Annotated[str, typer.Option("--name", "-n")] = "value",
    type_variable: Annotated[
        list[str] | None,
        typer.Option("--type-variable", "-t", help="Generic parameter in scope"),
    ] = None,
    log_filter: Annotated[str | None, typer.Option("--log-filter")] = None,
    strict: Annotated[bool, typer.Option("--strict")] = False,
) -> None:
    """Infer the field and modifier types of one styled parameter."""
    settings = _settings(log_filter, strict=strict)
    if style not in BUILTIN_STYLES:
        known = ", ".join(BUILTIN_STYLES)
        typer.echo(f"unknown style {style}; known styles: {known}", err=True)
        raise typer.Exit(2)

    try:
        parameter = Parameter(name, parse_type(consumer_type, type_variable or ()))
        plan = plan_method("<infer>", [parameter], {name: BUILTIN_STYLES[style]})
    except InferenceError as exc:
        logger.error("cli.infer.failed style={} error={}", style, exc)
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    _echo_plan(plan, settings)
    raise typer.Exit(_exit_code([plan], 0, settings))


@app.command()
def plan(
    request: Annotated[Path, typer.Argument(exists=True, dir_okay=False)],
    as_json: Annotated[bool, typer.Option("--json")] = False,
    log_filter: Annotated[str | None, typer.Option("--log-filter")] = None,
    strict: Annotated[bool, typer.Option("--strict")] = False,
) -> None:
    """Plan every method of a JSON generation request."""
    settings = _settings(log_filter, strict=strict)
    try:
        parsed = from_json(request.read_text(encoding="utf-8"))
    except (InferenceError, ValueError) as exc:
        logger.error("cli.plan.bad_request path={} error={}", str(request), exc)
        typer.echo(f"invalid request {request}: {exc}", err=True)
        raise typer.Exit(2) from exc

    plans: list[MethodPlan] = []
    failures = 0
    for method in parsed.methods:
        try:
            plans.append(method.plan())
        except InferenceError as exc:
            # One method's builder cannot be generated; keep going with the rest.
            failures += 1
            logger.error("cli.plan.method_failed method={} error={}", method.name, exc)
            typer.echo(f"{method.name}: {exc}", err=True)

    if as_json:
        typer.echo(to_json(plans))
    else:
        for method_plan in plans:
            _echo_plan(method_plan, settings)
    raise typer.Exit(_exit_code(plans, failures, settings))
