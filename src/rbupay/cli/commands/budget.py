"""Budget management commands."""

import click
from rbupay.cli.error_handling import handle_domain_error
from rbupay.cli.wallet_resolution import format_inr, resolve_wallet_or_exit
from rbupay.domain.budget import BudgetService
from rbupay.domain.entities import Category
from rbupay.utils.amount_parser import parse_amount

BUDGET_CATEGORY_CHOICES = [
    c.value for c in Category if c not in (Category.OTHERS, Category.FEES)
]


@click.group("budget")
def budget_group():
    """Manage budget envelopes."""
    pass


@budget_group.command("init")
@click.argument("wallet", metavar="WALLET")
@click.pass_context
def init_budgets(ctx, wallet: str):
    """Create the default budget envelopes for a wallet."""
    wallet_id = resolve_wallet_or_exit(ctx, wallet)
    created = BudgetService(ctx.obj["db"]).init_default_budgets(wallet_id)
    if created == 0:
        click.echo("Budgets already exist.")
    else:
        click.echo(f"Successfully created {created} budgets.")


@budget_group.command("list")
@click.argument("wallet", metavar="WALLET")
@click.pass_context
def list_budgets(ctx, wallet: str):
    """List budgets of a wallet."""
    wallet_id = resolve_wallet_or_exit(ctx, wallet)
    budgets = BudgetService(ctx.obj["db"]).list_budgets(wallet_id)

    if not budgets:
        click.echo("No budgets found.")
        return

    click.echo(f"\n{'Category':<12} {'Spent':>14} {'Limit':>14} {'Remaining':>14}")
    click.echo("-" * 58)
    for b in budgets:
        click.echo(
            f"{b.category.value:<12} {format_inr(b.spent):>14} {format_inr(b.limit):>14} "
            f"{format_inr(b.remaining):>14}"
        )


@budget_group.command("set")
@click.argument("wallet", metavar="WALLET")
@click.argument("category", type=click.Choice(BUDGET_CATEGORY_CHOICES, case_sensitive=False))
@click.argument("limit", metavar="LIMIT")
@click.pass_context
def set_budget(ctx, wallet: str, category: str, limit: str):
    """Set the limit of a budget, creating the budget if needed.

    Examples:
        rbupay budget set "Arjun Sharma" Food 9000
    """
    wallet_id = resolve_wallet_or_exit(ctx, wallet)
    service = BudgetService(ctx.obj["db"])

    try:
        new_limit = parse_amount(limit)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    category_enum = Category.parse(category)
    try:
        if service.get_budget(wallet_id, category_enum) is None:
            service.create_budget(wallet_id, category_enum, new_limit)
            click.echo(f"Created {category_enum.value} budget of {format_inr(new_limit)}")
        else:
            service.set_limit(wallet_id, category_enum, new_limit)
            click.echo(f"Updated {category_enum.value} budget to {format_inr(new_limit)}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group)
