#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Locate in-scope Solidity files for a Code4rena contest.

The rendered README (GitHub "readme" endpoint with the html media type) holds
a scope table whose first column links every in-scope file. Library and
interface files are dropped with a coarse substring check on the whole path.
"""

from __future__ import annotations

import logging
from typing import List

import aiohttp
from bs4 import BeautifulSoup

from config_loader import GitHubConfig
from github_api import HTML_ACCEPT, gh_get_text, gh_headers

SOURCE_EXT = ".sol"
# substring match on the full path, so "Calibration.sol" is dropped too
EXCLUDED_SNIPPETS = ("lib", "interfaces", "libraries")


def is_excluded(path: str) -> bool:
    return any(sn in path for sn in EXCLUDED_SNIPPETS)


def parse_scope_contracts(readme_html: str) -> List[str]:
    soup = BeautifulSoup(readme_html or "", "html.parser")
    contracts_path: List[str] = []
    for row in soup.find_all("tr"):
        link = row.select_one("td a")
        if link is None:
            continue
        link_text = link.get_text()
        if not link_text.endswith(SOURCE_EXT):
            continue
        if is_excluded(link_text):
            logging.debug(f"skipping out-of-scope helper {link_text}")
            continue
        contracts_path.append(link_text)
    return contracts_path


async def get_contest_scope_contracts(
    session: aiohttp.ClientSession, config: GitHubConfig, repo_name: str
) -> List[str]:
    url = f"{config.api_base}/repos/{config.org}/{repo_name}/readme"
    html = await gh_get_text(
        session,
        url,
        headers=gh_headers(config, accept=HTML_ACCEPT),
        params={"direction": "desc"},
    )
    return parse_scope_contracts(html)
