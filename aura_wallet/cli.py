"""
AURA USD Wallet command-line panel.

Drives the wallet panel for one connected crypto address, keeping its state
in a JSON file store between invocations:

    aura-wallet --address 0xABC create
    aura-wallet --address 0xABC fund 100
    aura-wallet --address 0xABC transfer 30 aura_contractor_1 -d "Logo design"
    aura-wallet --address 0xABC show
    aura-wallet serve --port 8010
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime

from aura_wallet.config import settings
from aura_wallet.services.panel_service import Notification, PanelState, WalletPanel, format_usd
from aura_wallet.services.persistence import WalletPersistence
from aura_wallet.services.storage_service import get_store
from aura_wallet.services.wallet_service import SimulatedAuraClient, get_wallet_client
from aura_wallet.storage.jsonfile import JsonFileStore

# ANSI colors for terminal output
GREEN = "\033[92m"
BLUE = "\033[94m"
YELLOW = "\033[93m"
RED = "\033[91m"
CYAN = "\033[96m"
BOLD = "\033[1m"
RESET = "\033[0m"


def banner(text: str):
    print(f"\n{BOLD}{CYAN}{'=' * 48}")
    print(f"  {text}")
    print(f"{'=' * 48}{RESET}")


def info(text: str):
    print(f"  {BLUE}{text}{RESET}")


def warn(text: str):
    print(f"  {YELLOW}{text}{RESET}")


def print_notification(notification: Notification):
    color = GREEN if notification.level == "success" else RED
    print(f"  {color}{BOLD}{notification.message}{RESET}")


def format_date(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%b %d, %I:%M %p")


def render(panel: WalletPanel):
    banner("AURA USD Wallet")
    if panel.state == PanelState.DISCONNECTED:
        warn("Connect your crypto wallet to access AURA USD payments")
        return
    info(f"Address: {panel.address}")
    if panel.state == PanelState.NO_WALLET:
        warn("No USD wallet yet. Run 'create' to open one.")
        return

    info(f"Wallet:  {panel.wallet.wallet_id}")
    print(f"  {BOLD}Balance: {panel.balance_display}{RESET}")

    if panel.stats is not None:
        stats = panel.stats
        print(f"\n  {BOLD}Stats ({stats.period}){RESET}")
        info(f"Total volume:       ${stats.total_volume:,}")
        info(f"Total transactions: {stats.total_transactions}")
        info(f"Active wallets:     {stats.active_wallets}")

    print(f"\n  {BOLD}Recent transactions{RESET}")
    if not panel.transactions:
        info("No USD transactions yet")
    for tx in panel.recent_transactions:
        print(
            f"  {RED}-{format_usd(tx.amount)}{RESET}  {tx.description}"
            f"  -> {tx.recipient or '?'}  [{tx.status.value}]  {format_date(tx.timestamp)}"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aura-wallet", description="AURA USD wallet panel")
    parser.add_argument("--address", help="Connected crypto wallet address")
    parser.add_argument("--store-dir", help="Directory for saved wallet state (default: STORE_PATH)")
    parser.add_argument("--no-delay", action="store_true", help="Skip simulated API latency")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="Show wallet, stats and recent transactions")
    sub.add_parser("create", help="Create a USD wallet for the address")

    fund = sub.add_parser("fund", help="Convert MNEE earnings into USD balance")
    fund.add_argument("amount", nargs="?", help="MNEE amount (prompted when omitted)")

    transfer = sub.add_parser("transfer", help="Send USD to another wallet")
    transfer.add_argument("amount")
    transfer.add_argument("recipient")
    transfer.add_argument("-d", "--description", default="")

    sub.add_parser("stats", help="Refresh and show payment analytics")

    serve = sub.add_parser("serve", help="Run the simulated AURA API server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8010)
    return parser


def build_panel(args: argparse.Namespace) -> WalletPanel:
    if args.no_delay and settings.aura_client_mode == "simulated":
        client = SimulatedAuraClient(
            delays={
                "create_wallet": 0,
                "create_transaction": 0,
                "get_stats": 0,
                "fund_from_crypto": 0,
            }
        )
    else:
        client = get_wallet_client()
    store = JsonFileStore(root_dir=args.store_dir) if args.store_dir else get_store()
    persistence = WalletPersistence(store)
    return WalletPanel(client, persistence, notifier=print_notification)


async def run(args: argparse.Namespace, panel: WalletPanel) -> int:
    previous_stats = panel.stats
    await panel.connect(args.address)
    ok = True

    if args.command == "create":
        ok = await panel.create_wallet()
    elif args.command == "fund":
        amount = args.amount
        if amount is None:
            amount = input("Enter MNEE amount to convert to USD: ")
        ok = await panel.fund_wallet(amount)
    elif args.command == "transfer":
        panel.open_transfer_modal()
        panel.form.amount = args.amount
        panel.form.recipient = args.recipient
        panel.form.description = args.description
        ok = await panel.submit_transfer()
    elif args.command == "stats":
        # connect() fetches stats for a saved wallet; a failed fetch keeps the old snapshot.
        ok = panel.stats is not None and panel.stats is not previous_stats

    render(panel)
    return 0 if ok else 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "serve":
        import uvicorn

        uvicorn.run("aura_wallet.main:app", host=args.host, port=args.port)
        return 0

    if not args.address:
        parser.error("--address is required for wallet commands")

    panel = build_panel(args)
    return asyncio.run(run(args, panel))


if __name__ == "__main__":
    sys.exit(main())
