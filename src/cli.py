from pathlib import Path
from typing import Optional

import pandas as pd
import typer

from backend.error_handling import DataAccessError
from backend.tables import create_schema
from core.dependencies import DependencyContainer
from data.models import FilterCriteria
from data.queries import build_property_search_query

app = typer.Typer(
    name="lightbnb",
    help="CLI tool to query and manage the LightBnB rental database.",
    add_completion=False
)

PROPERTY_DISPLAY_COLUMNS = ["id", "title", "city", "cost_per_night", "average_rating"]
RESERVATION_DISPLAY_COLUMNS = ["id", "title", "city", "start_date", "end_date", "average_rating"]


def _container(db: Optional[Path], verbose: bool) -> DependencyContainer:
    return DependencyContainer(db_path=db, log_level="DEBUG" if verbose else "INFO", console_output=verbose)


def _fail(error: Exception) -> None:
    typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _echo_rows(rows, columns, empty_message: str) -> None:
    if not rows:
        typer.echo(empty_message)
        return
    df = pd.DataFrame(rows)
    typer.echo(df[[c for c in columns if c in df.columns]].to_string(index=False))


DbOption = typer.Option(None, "--db", help="Path to the DuckDB database file.")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Log to the console at DEBUG level.")


@app.command("init-db")
def init_db(db: Optional[Path] = DbOption, verbose: bool = VerboseOption):
    """
    Create the LightBnB tables if they do not exist.
    """
    try:
        with _container(db, verbose) as container:
            tables = create_schema(container.store, container.logger)
            typer.echo(f"Schema ready at {container.db_path}: {', '.join(tables)}")
    except DataAccessError as e:
        _fail(e)


@app.command("import-fixture")
def import_fixture(
    table: str = typer.Argument(..., help="Target table, e.g. users or properties."),
    json_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON fixture keyed by id."),
    db: Optional[Path] = DbOption,
    verbose: bool = VerboseOption,
):
    """
    Load a JSON fixture file into a table.
    """
    try:
        with _container(db, verbose) as container:
            inserted = container.duckdb_io.import_json_fixture(table, json_path)
            typer.secho(f"Imported {inserted} row(s) into {table}.", fg=typer.colors.GREEN)
    except (DataAccessError, ValueError) as e:
        _fail(e)


@app.command()
def properties(
    city: Optional[str] = typer.Option(None, "--city", help="Substring of the city name (case-sensitive)."),
    min_price: Optional[int] = typer.Option(None, "--min-price", help="Minimum cost per night, in cents."),
    max_price: Optional[int] = typer.Option(None, "--max-price", help="Maximum cost per night, in cents."),
    min_rating: Optional[float] = typer.Option(None, "--min-rating", help="Minimum average rating (0-5)."),
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum number of results."),
    show_sql: bool = typer.Option(False, "--show-sql", help="Print the generated query and parameters."),
    db: Optional[Path] = DbOption,
    verbose: bool = VerboseOption,
):
    """
    Search properties, cheapest first.
    """
    criteria = FilterCriteria(
        location_substring=city,
        min_price_per_night=min_price,
        max_price_per_night=max_price,
        min_rating=min_rating,
    )
    if show_sql:
        query = build_property_search_query(criteria, limit)
        typer.echo(query.sql)
        typer.echo(f"params: {list(query.params)}")

    try:
        with _container(db, verbose) as container:
            rows = container.properties.get_all_properties(criteria, limit)
    except DataAccessError as e:
        _fail(e)
    _echo_rows(rows, PROPERTY_DISPLAY_COLUMNS, "No properties found.")


@app.command()
def reservations(
    guest_id: int = typer.Argument(..., help="Id of the guest."),
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum number of results."),
    db: Optional[Path] = DbOption,
    verbose: bool = VerboseOption,
):
    """
    List a guest's reservations, earliest first.
    """
    try:
        with _container(db, verbose) as container:
            rows = container.reservations.get_all_reservations(guest_id, limit)
    except DataAccessError as e:
        _fail(e)
    _echo_rows(rows, RESERVATION_DISPLAY_COLUMNS, f"No reservations for guest {guest_id}.")


@app.command()
def user(
    email: str = typer.Argument(..., help="Email address of the user."),
    db: Optional[Path] = DbOption,
    verbose: bool = VerboseOption,
):
    """
    Show a single user by email.
    """
    try:
        with _container(db, verbose) as container:
            found = container.users.get_user_with_email(email)
    except DataAccessError as e:
        _fail(e)
    if found is None:
        typer.secho(f"No user with email {email}.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    typer.echo(f"{found['id']}: {found['name']} <{found['email']}>")


if __name__ == "__main__":
    app()
