import argparse
import asyncio
import json
from dataclasses import asdict
from typing import Any

from marketplace.config.settings import Settings
from marketplace.content.api import ContentApi, build_content_api
from marketplace.database.operations import SearchOrder, SearchParams
from marketplace.logging.logger import Log
from marketplace.rpc.client import RpcClient


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marketplace",
        description="Read-only queries against the content marketplace.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Search published content")
    search.add_argument("--term", default="")
    search.add_argument("--order", default="", choices=["", *[o.value for o in SearchOrder]])
    search.add_argument("--start", default="0.0.0", help="Pagination cursor (object id)")
    search.add_argument("--count", type=int, default=None)

    content = commands.add_parser("content", help="Fetch one content object by id")
    content.add_argument("content_id")

    seeders = commands.add_parser("seeders", help="List seeders ordered by price")
    seeders.add_argument("--limit", type=int, default=None)

    purchased = commands.add_parser("purchased", help="List content bought by an account")
    purchased.add_argument("account_id")
    purchased.add_argument("--term", default="")
    purchased.add_argument("--limit", type=int, default=None)

    restore = commands.add_parser("restore-key", help="Restore the decryption key of bought content")
    restore.add_argument("content_id")
    restore.add_argument("el_gamal_private")
    return parser


async def _run(api: ContentApi, args: argparse.Namespace, settings: Settings) -> Any:
    page_size = settings.default_page_size
    if args.command == "search":
        params = SearchParams(
            term=args.term,
            order=args.order,
            item_id=args.start,
            count=args.count or page_size,
        )
        return [asdict(c) for c in await api.search_content(params)]
    if args.command == "content":
        return asdict(await api.get_content(args.content_id))
    if args.command == "seeders":
        return [asdict(s) for s in await api.get_seeders(args.limit or page_size)]
    if args.command == "purchased":
        records = await api.get_purchased_content(
            args.account_id, term=args.term, limit=args.limit or page_size
        )
        return [asdict(c) for c in records]
    return await api.restore_content_keys(args.content_id, args.el_gamal_private)


async def _main(args: argparse.Namespace, settings: Settings) -> Any:
    async with RpcClient(url=settings.node_url, timeout_seconds=settings.rpc_timeout_seconds) as rpc:
        api = build_content_api(settings, rpc)
        return await _run(api, args, settings)


def main(argv: list[str] | None = None) -> None:
    """Entry point: parse args -> load settings -> run one query -> print JSON."""
    args = _build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info(f"Running '{args.command}' against {settings.node_url}")
    result = asyncio.run(_main(args, settings))
    print(json.dumps(result, indent=2, default=str))


if __name__ == "__main__":
    main()
