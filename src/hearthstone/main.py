"""
Hearthstone - CLI Entry Point.

Usage:
    hearthstone inventory add "Chicken Breast" --expires 2026-10-18
    hearthstone recommend     Tonight's pick
    hearthstone cook <id>     Step through a recipe
    hearthstone progress      Level, streak and achievements
    hearthstone health        Check configuration
    hearthstone --help        Show help
"""

import asyncio
from datetime import datetime

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from hearthstone.config import get_settings, setup_logging
from hearthstone.engine import (
    Kitchen,
    SessionState,
    group_by_expiry,
    next_milestone,
    streak_message,
)
from hearthstone.engine.expiry import days_until_expiry
from hearthstone.errors import HearthstoneError
from hearthstone.storage import JsonFileStore

app = typer.Typer(
    name="hearthstone",
    help="Hearthstone - Meal planning and kitchen gamification.",
    add_completion=False,
)
inventory_app = typer.Typer(help="Manage fridge, freezer and pantry items.")
app.add_typer(inventory_app, name="inventory")
console = Console()


@app.callback()
def main() -> None:
    setup_logging(get_settings().log_level)


def _kitchen() -> Kitchen:
    """Build the Kitchen on the configured data directory and load its state."""
    settings = get_settings()
    remote = None
    if settings.sync_enabled:
        from hearthstone.sync import RemoteProfileStore

        remote = RemoteProfileStore()
    kitchen = Kitchen(
        JsonFileStore(settings.data_dir),
        remote=remote,
        expiry_window_days=settings.expiry_window_days,
    )
    asyncio.run(kitchen.load())
    return kitchen


# =============================================================================
# Inventory
# =============================================================================


@inventory_app.command("add")
def inventory_add(
    name: str = typer.Argument(..., help="Item name"),
    quantity: str = typer.Option("1", "--quantity", "-q", help="Quantity"),
    unit: str = typer.Option("count", "--unit", "-u", help="count, g, kg, ml, l, oz, lb"),
    location: str = typer.Option("fridge", "--location", "-l", help="fridge, freezer, pantry"),
    category: str = typer.Option("other", "--category", "-c", help="Food category"),
    expires: str = typer.Option(None, "--expires", "-e", help="Expiry date (YYYY-MM-DD)"),
    emoji: str = typer.Option(None, "--emoji", help="Display emoji"),
) -> None:
    """Add an item to the inventory."""
    kitchen = _kitchen()
    item = kitchen.inventory.add(
        name,
        quantity=quantity,
        unit=unit,
        location=location,
        category=category,
        expiry_date=expires,
        emoji=emoji,
    )
    if item is None:
        console.print("[yellow]Nothing added (empty name).[/yellow]")
        return
    asyncio.run(kitchen.save())
    console.print(f"✅ Added {item.emoji} {item.name} ({item.id})")


@inventory_app.command("list")
def inventory_list(
    location: str = typer.Option(None, "--location", "-l", help="Only this location"),
) -> None:
    """List inventory items."""
    kitchen = _kitchen()
    items = kitchen.inventory.by_location(location) if location else kitchen.inventory.items
    now = datetime.now()

    table = Table(title="Inventory")
    table.add_column("Item")
    table.add_column("Qty", justify="right")
    table.add_column("Location")
    table.add_column("Expires in", justify="right")
    table.add_column("Id", style="dim")
    for item in items:
        days = days_until_expiry(item, now)
        table.add_row(
            f"{item.emoji} {item.name}",
            f"{item.quantity:g} {item.unit}",
            item.location,
            "-" if days is None else f"{days}d",
            item.id,
        )
    console.print(table)


@inventory_app.command("remove")
def inventory_remove(item_id: str = typer.Argument(..., help="Item id")) -> None:
    """Remove an item by id."""
    kitchen = _kitchen()
    kitchen.inventory.remove(item_id)
    asyncio.run(kitchen.save())
    console.print(f"🗑️  Removed {item_id}")


@inventory_app.command("expiring")
def inventory_expiring() -> None:
    """Show items grouped by how soon they expire."""
    kitchen = _kitchen()
    groups = group_by_expiry(kitchen.inventory.items, datetime.now())
    for label, style, items in (
        ("Urgent (≤3 days)", "red", groups.urgent),
        ("Warning (≤7 days)", "yellow", groups.warning),
        ("Upcoming (≤14 days)", "green", groups.upcoming),
    ):
        console.print(f"\n[bold {style}]{label}[/bold {style}]")
        if not items:
            console.print("  [dim]none[/dim]")
        for item in items:
            console.print(f"  {item.emoji} {item.name}")


# =============================================================================
# Recommendation and cooking
# =============================================================================


@app.command()
def recommend(
    reject: bool = typer.Option(False, "--reject", "-r", help="Reject the current pick"),
    reason: str = typer.Option(None, "--reason", help="Why the pick was rejected"),
) -> None:
    """Show tonight's recommendation."""
    kitchen = _kitchen()
    try:
        rec = kitchen.reject_and_get_next(reason) if reject else kitchen.recommend()
    except HearthstoneError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    asyncio.run(kitchen.save())

    body = (
        f"[bold]{rec.recipe.name}[/bold] ({rec.recipe.total_time} min, {rec.recipe.difficulty})\n"
        f"{rec.reasoning}\n"
    )
    if rec.expiring_ingredients:
        body += "\nUses: " + ", ".join(i.name for i in rec.expiring_ingredients)
    if rec.missing_ingredients:
        body += "\nMissing: " + ", ".join(rec.missing_ingredients)
    if rec.estimated_savings:
        body += f"\nSaves about ${rec.estimated_savings:.0f}"
    console.print(Panel.fit(body, title="Tonight", border_style="green"))
    console.print(f"[dim]hearthstone cook {rec.recipe.id}[/dim]")


@app.command()
def cook(recipe_id: str = typer.Argument(..., help="Recipe id (see `hearthstone recipes`)")) -> None:
    """Step through a recipe, then rate it."""
    kitchen = _kitchen()
    try:
        session = kitchen.start_cooking(recipe_id)
    except HearthstoneError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    asyncio.run(kitchen.save())

    recipe = session.recipe
    console.print(Panel.fit(f"[bold]{recipe.name}[/bold]\n{recipe.description}", border_style="green"))
    for ing, amount in session.scaled_ingredients():
        optional = " (optional)" if ing.optional else ""
        console.print(f"  • {amount} {ing.unit} {ing.name}{optional}")

    while session.state is SessionState.IN_PROGRESS:
        step = session.current_step
        if step is not None:
            duration = f" [dim]({step.duration} min)[/dim]" if step.duration else ""
            console.print(f"\n[bold]Step {step.order}/{len(recipe.steps)}[/bold]{duration}")
            console.print(step.instruction)
            if step.tip:
                console.print(f"[dim]💡 {step.tip}[/dim]")

        choice = console.input("\n(n)ext  (p)rev  (q)uit > ").strip().lower()
        if choice in ("q", "quit", "exit"):
            session.exit()
            asyncio.run(kitchen.save())
            console.print("[dim]Progress saved. Run the same command to resume.[/dim]")
            return
        if choice in ("p", "prev"):
            session.prev_step()
        else:
            session.next_step()

    raw = console.input("\nRate this meal 1-5 (blank to skip): ").strip()
    rating = int(raw) if raw.isdigit() else None
    outcome = asyncio.run(kitchen.complete_cooking(rating=rating))

    console.print(
        f"\n🎉 +{outcome.result.xp_awarded} XP"
        f" · streak {outcome.result.streak}"
        + (f" · level up x{outcome.result.levels_gained}!" if outcome.result.levels_gained else "")
    )
    for achievement in outcome.unlocked:
        console.print(f"🏅 {achievement.emoji} {achievement.name} unlocked")


@app.command()
def recipes(
    cuisine: str = typer.Option(None, "--cuisine", help="Filter by cuisine"),
    difficulty: str = typer.Option(None, "--difficulty", help="easy, medium or hard"),
    max_time: int = typer.Option(None, "--max-time", help="Max total minutes"),
) -> None:
    """List the recipe catalog."""
    kitchen = _kitchen()
    table = Table(title="Recipes")
    table.add_column("Id", style="dim")
    table.add_column("Name")
    table.add_column("Cuisine")
    table.add_column("Difficulty")
    table.add_column("Time", justify="right")
    for r in kitchen.catalog.filter(cuisine=cuisine, difficulty=difficulty, max_total_time=max_time):
        table.add_row(r.id, r.name, r.cuisine, r.difficulty, f"{r.total_time} min")
    console.print(table)


# =============================================================================
# Progress and prep
# =============================================================================


@app.command()
def progress() -> None:
    """Show level, streak and achievements."""
    kitchen = _kitchen()
    p = kitchen.progress.progress

    console.print(f"\n[bold]Level {p.level}[/bold]  {p.current_xp}/{p.next_level_xp} XP")
    console.print(f"🔥 {streak_message(p.streak, p.longest_streak)} (best {p.longest_streak})")
    milestone = next_milestone(p.streak)
    if milestone:
        console.print(f"   Next: {milestone.emoji} {milestone.label} at {milestone.days} days")

    table = Table(title="Achievements")
    table.add_column("")
    table.add_column("Name")
    table.add_column("Tier")
    table.add_column("Progress", justify="right")
    for a in p.achievements:
        status = "✅" if a.is_unlocked else "  "
        table.add_row(status, f"{a.emoji} {a.name}", a.tier, f"{a.progress}/{a.target}")
    console.print(table)

    active = kitchen.progress.active_challenges()
    if active:
        console.print("\n[bold]Challenges[/bold]")
        for c in active:
            console.print(f"  {c.emoji} {c.title}: {c.progress}/{c.target} (+{c.reward.xp} XP)")


@app.command()
def prep() -> None:
    """Regenerate and show prep tasks for upcoming meals."""
    kitchen = _kitchen()
    if kitchen.regenerate_prep():
        asyncio.run(kitchen.save())

    tasks = kitchen.prep.tasks
    if not tasks:
        console.print("[dim]No prep tasks. Plan some meals first.[/dim]")
        return
    for t in tasks:
        mark = "✅" if t.completed else "⬜"
        console.print(f"{mark} {t.emoji} {t.task} ({t.time} min) - {', '.join(t.used_in)}")
    console.print(f"\n[dim]{kitchen.prep.total_remaining_time()} min remaining[/dim]")


# =============================================================================
# Meta
# =============================================================================


@app.command()
def health() -> None:
    """Check system health and configuration."""
    console.print("\n[bold]Hearthstone Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("✅ Configuration loaded")
        console.print(f"   Environment: {settings.hearthstone_env}")
        console.print(f"   Log level: {settings.log_level}")
        console.print(f"   Data dir: {settings.data_dir}")

        if settings.sync_enabled:
            console.print("✅ Supabase sync configured")
        else:
            console.print("ℹ️  Supabase sync disabled (local only)")

        console.print("\n[green]All checks passed![/green]")

    except Exception as e:
        console.print(f"\n[red]❌ Configuration error: {e}[/red]")
        console.print("[dim]Check your .env file.[/dim]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from hearthstone import __version__

    console.print(f"Hearthstone v{__version__}")


if __name__ == "__main__":
    app()
