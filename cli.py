#!/usr/bin/env python3
"""
Clinicalc CLI

Command-line interface for the clinical calculators.
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()
logger = logging.getLogger(__name__)


def setup_paths():
    """Add the project root to sys.path for imports."""
    root = Path(__file__).parent
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


setup_paths()


CATEGORY_STYLES = {
    "Underweight": "blue",
    "Healthy": "green",
    "Overweight": "yellow",
    "Obesity": "red",
    "Severe": "red",
}


def _category_style(category: str) -> str:
    for key, style in CATEGORY_STYLES.items():
        if key in category:
            return style
    return "dim"


@click.group()
@click.version_option(version="0.1.0", prog_name="clinicalc")
@click.option("--log-level", type=str, default=None, help="Logging level (default: CLINICALC_LOG_LEVEL or INFO)")
def cli(log_level: Optional[str]):
    """
    Clinicalc - Clinical Calculators

    Validate national IDs, grade BMI for infants, children and adults, and
    predict adult height with the Paley multiplier method.
    """
    from src.config import configure_logging

    configure_logging(log_level.upper() if log_level else None)


@cli.command("national-id")
@click.argument("national_id")
@click.option("--json", "as_json", is_flag=True, help="Print the decoded result as JSON")
def national_id(national_id: str, as_json: bool):
    """
    Validate a CNP and decode sex, birth date and region.

    Example:

        clinicalc national-id 1960315123451
    """
    from src.engines import validate_national_id
    from src.exporters import export_json

    decoded = validate_national_id(national_id)

    if as_json:
        click.echo(export_json(decoded))
    elif decoded.is_valid:
        table = Table(title=f"CNP {national_id}")
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("Sex", decoded.sex.value)
        table.add_row("Date of birth", decoded.date_of_birth)
        table.add_row("Region", decoded.region)
        console.print(table)
    else:
        console.print(f"[red]✗ {decoded.error}[/red]")

    if not decoded.is_valid:
        sys.exit(1)


@cli.command()
@click.option("--height", "height_cm", type=float, required=True, help="Height in cm")
@click.option("--weight", "weight_kg", type=float, required=True, help="Weight in kg")
@click.option("--dob", type=click.DateTime(formats=["%Y-%m-%d"]), help="Date of birth (YYYY-MM-DD)")
@click.option("--sex", type=str, help="Patient sex (male/female)")
@click.option("--date", "ref_date", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Measurement date (default: today)")
@click.option("--json", "as_json", is_flag=True, help="Print the observation payload as JSON")
def bmi(height_cm: float, weight_kg: float, dob, sex: Optional[str], ref_date, as_json: bool):
    """
    Calculate and grade BMI.

    Examples:

        clinicalc bmi --height 170 --weight 70

        clinicalc bmi --height 140 --weight 35 --dob 2014-05-02 --sex female
    """
    from src.engines import compute_bmi
    from src.exporters import export_json
    from src.models import BmiCategory, normalize_sex, record_bmi

    birth_date = dob.date() if dob else None
    reference_date = ref_date.date() if ref_date else date.today()

    result = compute_bmi(height_cm, weight_kg, birth_date, sex, reference_date)
    if result is None:
        console.print("[yellow]Height and weight must both be positive[/yellow]")
        sys.exit(1)

    if result.category in (BmiCategory.UNKNOWN, BmiCategory.LOOKUP_FAILED):
        logger.warning("BMI graded with fallback category %r", result.category.value)

    if as_json:
        observation = record_bmi(result, height_cm, weight_kg, birth_date, normalize_sex(sex))
        click.echo(export_json(observation))
        return

    category = result.category.value
    lines = [
        f"[bold]{result.bmi}[/bold] kg/m²",
        f"[{_category_style(category)}]{category}[/{_category_style(category)}]",
        "",
        f"Age: {result.demographics.age_months} months ({result.demographics.label})",
    ]
    if result.percentile is not None:
        lines.append(f"Percentile: {result.percentile}th   Z-score: {result.z_score} SD")
    lines.append(f"[dim]{result.meta.methodology} • {result.meta.formula}[/dim]")

    console.print(Panel("\n".join(lines), title="Body Mass Index", border_style="blue"))


@cli.command()
@click.option("--height", "height_cm", type=float, required=True, help="Current height in cm")
@click.option("--sex", type=click.Choice(["male", "female"], case_sensitive=False), required=True,
              help="Patient sex")
@click.option("--dob", type=click.DateTime(formats=["%Y-%m-%d"]), help="Date of birth (YYYY-MM-DD)")
@click.option("--date", "ref_date", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Measurement date (default: today)")
@click.option("--bone-age", type=float, help="Skeletal age in years (overrides chronological age)")
@click.option("--json", "as_json", is_flag=True, help="Print the observation payload as JSON")
def height(height_cm: float, sex: str, dob, ref_date, bone_age: Optional[float], as_json: bool):
    """
    Predict adult height (Paley multiplier method).

    Examples:

        clinicalc height --height 145 --sex male --dob 2013-09-01

        clinicalc height --height 145 --sex female --bone-age 11.5
    """
    from src.engines import chronological_age_years, compute_height_prediction, format_imperial_height
    from src.exporters import export_json
    from src.models import record_height_prediction

    reference_date = ref_date.date() if ref_date else date.today()

    if bone_age is not None:
        age_years = bone_age
    elif dob is not None:
        age_years = chronological_age_years(dob.date(), reference_date)
    else:
        raise click.UsageError("Provide --dob or --bone-age")

    result = compute_height_prediction(height_cm, age_years, sex, uses_bone_age=bone_age is not None)
    if result is None:
        console.print("[yellow]Height and age must both be positive[/yellow]")
        sys.exit(1)

    if as_json:
        observation = record_height_prediction(result, height_cm, reference_date)
        click.echo(export_json(observation))
        return

    age_source = "bone age" if result.is_bone_age else "chronological"
    console.print(Panel(
        f"[bold green]{result.predicted_height_cm} cm[/bold green] "
        f"({format_imperial_height(result.predicted_height_cm)})\n\n"
        f"Current height: {result.current_height_cm} cm\n"
        f"Growth remaining: {result.growth_remaining_cm} cm\n"
        f"Age used: {result.age_used} years ({age_source})\n"
        f"[dim]Multiplier: {result.multiplier}[/dim]",
        title="Predicted Adult Height",
        border_style="green",
    ))


@cli.command()
@click.argument("cm", type=float)
def imperial(cm: float):
    """
    Convert centimeters to feet and inches.
    """
    from src.engines import format_imperial_height

    click.echo(format_imperial_height(cm))


@cli.command()
def regions():
    """
    List national ID region names.
    """
    from knowledge.regions import list_regions

    for name in list_regions():
        console.print(f"  • {name}")


@cli.command()
@click.option("--host", type=str, default=None, help="Bind address (default: CLINICALC_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: CLINICALC_PORT)")
def serve(host: Optional[str], port: Optional[int]):
    """
    Run the HTTP API.
    """
    from server import run_server

    run_server(host=host, port=port)


@cli.command()
def info():
    """
    Show information about Clinicalc.
    """
    console.print(Panel(
        "[bold]Clinicalc[/bold]\n\n"
        "Stateless clinical calculators:\n"
        "• CNP validation and decoding\n"
        "• BMI (WHO adult cut points, CDC 2000 pediatric percentiles)\n"
        "• Adult height prediction (Paley multiplier method)\n\n"
        "[dim]Results are returned for the caller to store verbatim.[/dim]",
        title="About",
        border_style="blue",
    ))

    console.print("\n[bold]Quick Start:[/bold]")
    console.print("  clinicalc national-id 1960315123451")
    console.print("  clinicalc bmi --height 170 --weight 70")
    console.print("  clinicalc height --height 145 --sex male --bone-age 11.5")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
