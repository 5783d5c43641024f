#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Scrape active Code4rena contests (GitHub org: code-423n4), build their
in-scope contracts with forge and export pragma versions + bytecode.

Output:
  contest_info.json                 (overwritten every run)
  optional flat CSV via --csv

Requires:
  - GITHUB_TOKEN in .env or the environment
  - git and forge (Foundry) in PATH

Usage:
  python scrape_active_contests.py
  python scrape_active_contests.py --filter 2024 --workdir repos --csv outputs/contest_contracts.csv
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import aiohttp
from tqdm import tqdm

from config_loader import ConfigError, GitHubConfig, load_config
from contest_dates import extract_end_date, is_active
from contests import DEFAULT_OUT, Contest, Contests, Contract, export_contest_info, export_contracts_csv
from contract_inspector import get_contract_bytecode, get_pragma_version
from forge_tools import ForgeToolchain, clone_repo, compile_contracts
from github_api import GitHubError, gh_get_json, gh_get_text, gh_headers
from scope_contracts import get_contest_scope_contracts

ROOT = Path(__file__).resolve().parent
LOGS = ROOT / "logs"

DEFAULT_NAME_FILTER = "2023"
PER_PAGE = 100


def setup_logging(verbose: bool = False) -> None:
    LOGS.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
        handlers=[
            logging.FileHandler(LOGS / "scrape_active_contests.log", mode="a", encoding="utf-8"),
            logging.StreamHandler(),
        ],
        force=True,
    )


# ────────────────────────────────────────────────────────────────────────────────
# GitHub
# ────────────────────────────────────────────────────────────────────────────────
async def fetch_org_repos(session: aiohttp.ClientSession, config: GitHubConfig, max_pages: int = 0) -> List[dict]:
    url = f"{config.api_base}/orgs/{config.org}/repos"
    repos: List[dict] = []
    page = 1
    while True:
        params = {"direction": "desc", "per_page": PER_PAGE, "page": page}
        batch = await gh_get_json(session, url, headers=gh_headers(config), params=params)
        if not batch:
            break
        repos.extend(batch)
        if len(batch) < PER_PAGE or (max_pages and page >= max_pages):
            break
        page += 1
    logging.info(f"Loaded {len(repos)} repos from {config.org}")
    return repos


async def fetch_contest_readme(session: aiohttp.ClientSession, config: GitHubConfig, repo_name: str) -> str:
    url = f"{config.raw_base}/{config.org}/{repo_name}/{config.branch}/README.md"
    return await gh_get_text(session, url, headers=gh_headers(config))


# ────────────────────────────────────────────────────────────────────────────────
# Per-contest pipeline
# ────────────────────────────────────────────────────────────────────────────────
async def process_contest(
    session: aiohttp.ClientSession,
    config: GitHubConfig,
    repo_name: str,
    toolchain: ForgeToolchain,
    workdir: Path = Path("."),
    now: Optional[datetime] = None,
) -> Optional[Contest]:
    try:
        contest_info = await fetch_contest_readme(session, config, repo_name)
    except GitHubError as e:
        logging.warning(f"⚠️ {repo_name}: README unavailable ({e})")
        return None

    end_date = extract_end_date(contest_info)
    if end_date is None:
        logging.debug(f"{repo_name}: no end date found")
        return None
    if not is_active(end_date, now):
        logging.debug(f"{repo_name}: ended {end_date}")
        return None

    logging.info(f"{repo_name}: {end_date}")
    try:
        contracts_path = await get_contest_scope_contracts(session, config, repo_name)
    except GitHubError as e:
        logging.warning(f"⚠️ {repo_name}: scope unavailable ({e})")
        return None

    repo_dir = clone_repo(repo_name, toolchain, config.org, workdir)
    compile_contracts(repo_dir, toolchain)

    contest = Contest(repo_name)
    logging.info(f"Found {len(contracts_path)} contracts")
    logging.info("Getting pragma versions and bytecodes from contracts...")
    for path in tqdm(contracts_path, desc=repo_name, unit="contract"):
        contract_path = repo_dir / path.lstrip("/")
        pragma_version = get_pragma_version(contract_path)
        contract_name, bytecode = get_contract_bytecode(path, repo_dir, toolchain)

        if pragma_version is None:
            logging.warning(f"{contract_path}: No pragma version found")
            continue
        contest.add_contract(Contract(contract_name, bytecode, pragma_version))

    logging.info(f"✅ Jobs done! {repo_name}: {len(contest.contracts)} contracts recorded")
    return contest


async def scrape_contests(
    session: aiohttp.ClientSession,
    config: GitHubConfig,
    toolchain: ForgeToolchain,
    *,
    name_filter: str = DEFAULT_NAME_FILTER,
    workdir: Path = Path("."),
    max_pages: int = 0,
    now: Optional[datetime] = None,
) -> Contests:
    contests = Contests()
    for repo in await fetch_org_repos(session, config, max_pages=max_pages):
        name = repo.get("name", "")
        if name_filter not in name:
            continue
        contest = await process_contest(session, config, name, toolchain, workdir, now)
        if contest is not None:
            contests.add_contest(contest)
    return contests


async def run(config: GitHubConfig, **kwargs) -> Contests:
    async with aiohttp.ClientSession() as session:
        return await scrape_contests(session, config, ForgeToolchain(), **kwargs)


# ────────────────────────────────────────────────────────────────────────────────
# CLI
# ────────────────────────────────────────────────────────────────────────────────
def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Export pragma versions and bytecode of active Code4rena contests.")
    ap.add_argument("--org", default=None, help="GitHub organization (default code-423n4)")
    ap.add_argument("--filter", dest="name_filter", default=DEFAULT_NAME_FILTER,
                    help="Only repos whose name contains this substring")
    ap.add_argument("--out", type=Path, default=DEFAULT_OUT, help="JSON output path")
    ap.add_argument("--csv", type=Path, default=None, help="Also write a flat per-contract CSV")
    ap.add_argument("--workdir", type=Path, default=Path("."), help="Where contest repos are cloned")
    ap.add_argument("--max-pages", type=int, default=0, help="Limit repo listing pages (0 = all)")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    setup_logging(args.verbose)
    try:
        config = load_config(org=args.org)
    except ConfigError as e:
        logging.error(str(e))
        raise SystemExit(1) from e

    contests = asyncio.run(
        run(config, name_filter=args.name_filter, workdir=args.workdir, max_pages=args.max_pages)
    )

    logging.info("Exporting contests info...")
    out = export_contest_info(contests, args.out)
    logging.info(f"✅ Contests info exported successfully → {out} ({len(contests.contests)} contests)")
    if args.csv:
        csv_out = export_contracts_csv(contests, args.csv)
        logging.info(f"📊 Saved per-contract CSV → {csv_out}")


if __name__ == "__main__":
    main()
