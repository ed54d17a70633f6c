"""Command-line reports for the dairy cooperative.

Fetches records from the cooperative data service and prints stock,
earnings, milk eligibility, herd and per-member summaries.
"""

import argparse
import asyncio
import json
import sys
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from milkcoop.analysis import eligibility, inventory
from milkcoop.analysis.earnings import (
    daily_earnings,
    earnings_summary,
    monthly_comparison,
    recent_transactions,
    total_spoilage_loss,
)
from milkcoop.analysis.members import member_statistics
from milkcoop.core import client, settings
from milkcoop.core.units import format_currency, format_liters, format_status, yes_no
from milkcoop.data import herd
from milkcoop.data.models import InvalidInputError, NotFoundError

# Days shown in the daily tables
TREND_DAYS = 7


def get_today() -> date:
    """Today in the cooperative's timezone (local time if none configured)."""
    if not settings.tz:
        return date.today()
    try:
        zone = ZoneInfo(settings.tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidInputError(f"Unknown timezone {settings.tz!r} (set TZ to an IANA name)") from e
    return datetime.now(zone).date()


def last_n_days(today: date, n: int = TREND_DAYS) -> list[date]:
    """The n days ending on ``today``, oldest first."""
    return [today - timedelta(days=i) for i in range(n - 1, -1, -1)]


def _parse_date_arg(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from e


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str))


async def cmd_stock(args: argparse.Namespace) -> None:
    """Show stock figures and the last week of production."""
    data = await client.fetch_all()
    today = args.date

    summary = inventory.stock_summary(data.milk_in, data.milk_out, data.milk_spoilt, today)
    monthly = inventory.monthly_stock_summary(data.milk_in, data.milk_out, data.milk_spoilt, today)
    spoilage = inventory.spoilage_summary(data.milk_spoilt)

    produced = inventory.group_by_day(data.milk_in)
    sold = inventory.group_by_day(data.milk_out)
    spoilt = inventory.group_by_day(data.milk_spoilt)
    days = [
        {
            "date": day,
            "milk_in": produced.get(day, 0.0),
            "milk_out": sold.get(day, 0.0),
            "spoilt": spoilt.get(day, 0.0),
        }
        for day in last_n_days(today)
    ]

    if args.json:
        _print_json({"summary": summary, "monthly": monthly, "spoilage": spoilage, "days": days})
        return

    print(f"Stock as of {today.isoformat()}:")
    print(f"  Current stock:      {format_liters(summary['current_stock'])}")
    print(f"  Produced today:     {format_liters(summary['daily_produce'])}")
    print(f"  Sold today:         {format_liters(summary['daily_total_liters_sold'])}")
    print(f"  Sold this week:     {format_liters(summary['weekly_sold'])}")
    print(f"  Spoilt this week:   {format_liters(summary['weekly_spoilt'])}")
    print(f"  Sold this month:    {format_liters(summary['monthly_sold'])}")
    print(f"  Avg daily produce:  {format_liters(monthly['average_daily_production'])}")
    print(
        f"  Spoilt (all time):  {format_liters(spoilage['total_spoilt_liters'])} in "
        f"{spoilage['total_incidents']} incidents, {format_currency(spoilage['total_loss'])} lost"
    )

    print(f"\n{'Date':<12} {'In':>12} {'Out':>12} {'Spoilt':>12}")
    print("-" * 51)
    for row in days:
        print(
            f"{row['date'].isoformat():<12} {format_liters(row['milk_in']):>12} "
            f"{format_liters(row['milk_out']):>12} {format_liters(row['spoilt']):>12}"
        )


async def cmd_earnings(args: argparse.Namespace) -> None:
    """Show earnings figures and the last week of sales."""
    milk_out, milk_spoilt = await asyncio.gather(
        client.get_milk_out_entries(),
        client.get_milk_spoilt_entries(),
    )
    today = args.date

    summary = earnings_summary(milk_out, today)
    daily = daily_earnings(milk_out, last_n_days(today))
    months = monthly_comparison(milk_out, today)
    recent = [
        {
            "sale_id": sale.sale_id,
            "date": sale.date,
            "customer_name": sale.customer_name,
            "quantity_sold": sale.quantity_sold,
            "price_per_liter": sale.price_per_liter,
            "amount": sale.amount,
            "payment_mode": sale.payment_mode.value,
        }
        for sale in recent_transactions(milk_out)
    ]
    loss = total_spoilage_loss(milk_spoilt)

    if args.json:
        _print_json(
            {"summary": summary, "days": daily, "months": months, "recent": recent, "spoilage_loss": loss}
        )
        return

    print(f"Earnings as of {today.isoformat()}:")
    print(f"  Today:        {format_currency(summary['today_earnings'])}")
    print(f"  This week:    {format_currency(summary['weekly_earnings'])}")
    print(f"  This month:   {format_currency(summary['monthly_earnings'])}")
    print(f"  Spoilage loss (all time): {format_currency(loss)}")

    print(f"\n{'Date':<12} {'Earnings':>16} {'Sales':>6} {'Avg/sale':>16}")
    print("-" * 53)
    for row in daily:
        print(
            f"{row['date'].isoformat():<12} {format_currency(row['earnings']):>16} "
            f"{row['transaction_count']:>6} {format_currency(row['average_per_transaction']):>16}"
        )

    print(f"\n{'Period':<25} {'Earnings':>16} {'Sales':>6} {'Avg/day':>16}")
    print("-" * 66)
    for row in months:
        period = f"{row['period_start'].isoformat()} - {row['month'].isoformat()}"
        print(
            f"{period:<25} {format_currency(row['earnings']):>16} "
            f"{row['transaction_count']:>6} {format_currency(row['average_per_day']):>16}"
        )

    if recent:
        print("\nRecent sales:")
        for sale in recent:
            print(
                f"  {sale['date'].isoformat()}  {sale['customer_name']:<20} "
                f"{format_liters(sale['quantity_sold']):>10} {format_currency(sale['amount']):>14} "
                f"{sale['payment_mode']}"
            )


async def cmd_eligibility(args: argparse.Namespace) -> None:
    """Show milk eligibility for one cow or the whole herd."""
    cows = await client.get_cows()
    today = args.date

    if args.cow_id:
        details = eligibility.health_details(herd.find_cow(cows, args.cow_id), today)
        if args.json:
            _print_json(details)
            return
        print(f"Cow: {details['name']} ({details['cow_id']})")
        print(f"Health: {format_status(details['health_status'])}")
        if details["vaccination_last"]:
            print(f"Last vaccination: {details['vaccination_last']}")
            print(f"  Waiting period ends: {details['vaccination_waiting_period_end']}")
        if details["antibiotic_treatment"]:
            print(f"Last antibiotics: {details['antibiotic_treatment']}")
            print(f"  Waiting period ends: {details['antibiotic_waiting_period_end']}")
        print(f"Can collect milk: {yes_no(details['can_collect_milk'])}")
        if details["blocked_reason"]:
            print(f"Reason: {details['blocked_reason']}")
        return

    report = eligibility.bulk_eligibility(cows, today, owner_id=args.owner, active_only=not args.all)
    if args.json:
        _print_json(
            {
                "total_cows": report.total_cows,
                "eligible_cows": report.eligible_cows,
                "blocked_cows": report.blocked_cows,
                "cows": [
                    {
                        "cow_id": cow.cow_id,
                        "name": cow.name,
                        "health_status": cow.health_status.value,
                        "can_collect": result.can_collect,
                        "reason": result.blocking_reason,
                        "blocked_until": result.blocked_until,
                        "warning": result.warning,
                    }
                    for cow, result in report.cows
                ],
            }
        )
        return

    print(f"Milk eligibility for {today.isoformat()}:")
    for cow, result in report.cows:
        mark = "OK" if result.can_collect else "BLOCKED"
        note = result.blocking_reason or result.warning or ""
        print(f"  {cow.name or cow.cow_id:<15} {format_status(cow.health_status.value):<16} {mark:<8} {note}")
    print(f"\n{report.eligible_cows} of {report.total_cows} cows eligible, {report.blocked_cows} blocked")


async def cmd_herd(args: argparse.Namespace) -> None:
    """Show herd and membership summaries."""
    cows, members = await asyncio.gather(client.get_cows(), client.get_members())
    cow_counts = herd.cow_summary(cows)
    member_counts = herd.member_summary(members, cows)

    if args.json:
        _print_json({"cows": cow_counts, "members": member_counts})
        return

    print("Cows:")
    print(f"  Active:           {cow_counts['total_active_cows']}")
    print(f"  Archived:         {cow_counts['total_archived_cows']}")
    print(f"  Healthy:          {cow_counts['healthy_cows']}")
    print(f"  Needs attention:  {cow_counts['needs_attention']}")
    print("\nMembers:")
    print(f"  Active:           {member_counts['total_active_members']}")
    print(f"  Archived:         {member_counts['total_archived_members']}")
    print(f"  With active cows: {member_counts['members_with_active_cows']}")


async def cmd_members(args: argparse.Namespace) -> None:
    """Show per-member production, highest monthly production first."""
    members, cows, milk_in = await asyncio.gather(
        client.get_members(),
        client.get_cows(),
        client.get_milk_in_entries(),
    )
    stats = member_statistics(members, cows, milk_in, args.date, active_only=not args.all)

    if args.json:
        _print_json(stats)
        return

    print(f"Member production as of {args.date.isoformat()}:")
    print(
        f"\n{'Member':<20} {'Cows':>5} {'Healthy':>8} {'Today':>10} {'Week':>10} "
        f"{'Month':>11} {'Avg/day':>9} {'Last entry':>11}"
    )
    print("-" * 91)
    for row in stats:
        last = row["last_entry_date"].isoformat() if row["last_entry_date"] else "-"
        print(
            f"{row['name'] or row['member_id']:<20} {row['total_cows']:>5} {row['healthy_cows']:>8} "
            f"{format_liters(row['today_production']):>10} {format_liters(row['weekly_production']):>10} "
            f"{format_liters(row['monthly_production']):>11} "
            f"{format_liters(row['average_daily_production']):>9} {last:>11}"
        )


async def cli_main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = argparse.ArgumentParser(
        description="Dairy cooperative milk reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  milkcoop stock                       Stock figures and last 7 days of production
  milkcoop earnings --date 2025-06-10  Earnings as of a given day
  milkcoop eligibility                 Which cows can be milked today
  milkcoop eligibility CW01            Health details for one cow
  milkcoop herd --json                 Herd and member counts as JSON
  milkcoop members                     Production per member
""",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Options shared by every report
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--date", type=_parse_date_arg, default=None, help="Reference date YYYY-MM-DD (default: today)"
    )
    common.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("stock", parents=[common], help="Show stock summary")
    subparsers.add_parser("earnings", parents=[common], help="Show earnings summary")

    eligibility_parser = subparsers.add_parser("eligibility", parents=[common], help="Show milk eligibility")
    eligibility_parser.add_argument("cow_id", nargs="?", help="Cow ID (omit for the whole herd)")
    eligibility_parser.add_argument("--owner", help="Only cows owned by this member ID")
    eligibility_parser.add_argument("--all", action="store_true", help="Include archived cows")

    subparsers.add_parser("herd", parents=[common], help="Show herd and member summaries")

    members_parser = subparsers.add_parser("members", parents=[common], help="Show production per member")
    members_parser.add_argument("--all", action="store_true", help="Include archived members")

    args = parser.parse_args(argv)

    # Dispatch to command handlers
    commands = {
        "stock": cmd_stock,
        "earnings": cmd_earnings,
        "eligibility": cmd_eligibility,
        "herd": cmd_herd,
        "members": cmd_members,
    }

    if args.command not in commands:
        parser.print_help()
        return 0

    try:
        if args.date is None:
            args.date = get_today()
        await commands[args.command](args)
    except client.MilkServiceError as e:
        print(f"Error: data service request failed: {e}", file=sys.stderr)
        return 1
    except (NotFoundError, InvalidInputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cli() -> None:
    """CLI entry point."""
    sys.exit(asyncio.run(cli_main()))


if __name__ == "__main__":
    cli()
