#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Thin async GitHub helpers shared by the contest scraper.

Every request carries the bearer token, the pinned REST API version and the
fixed User-Agent. There is no retry: callers decide whether a GitHubError
skips the current repository or stops the run.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import aiohttp

from config_loader import GitHubConfig

JSON_ACCEPT = "application/vnd.github+json"
HTML_ACCEPT = "application/vnd.github.v3.html"


class GitHubError(RuntimeError):
    def __init__(self, url: str, status: Optional[int] = None, message: str = ""):
        self.url = url
        self.status = status
        msg = f"GitHub {status or 'network error'} for {url}"
        super().__init__(f"{msg}: {message}" if message else msg)


def gh_headers(config: GitHubConfig, accept: str = JSON_ACCEPT) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {config.token}",
        "Accept": accept,
        "X-GitHub-Api-Version": config.api_version,
        "User-Agent": config.user_agent,
    }


async def gh_get_text(
    session: aiohttp.ClientSession,
    url: str,
    *,
    headers: Dict[str, str],
    params: Optional[dict] = None,
) -> str:
    logging.debug(f"GET {url} params={params}")
    try:
        async with session.get(url, headers=headers, params=params) as r:
            body = await r.text(errors="replace")
            if not 200 <= r.status < 300:
                raise GitHubError(url, r.status, body[:200])
            return body
    except aiohttp.ClientError as e:
        raise GitHubError(url, message=str(e)) from e


async def gh_get_json(
    session: aiohttp.ClientSession,
    url: str,
    *,
    headers: Dict[str, str],
    params: Optional[dict] = None,
) -> Any:
    logging.debug(f"GET {url} params={params}")
    try:
        async with session.get(url, headers=headers, params=params) as r:
            if not 200 <= r.status < 300:
                raise GitHubError(url, r.status, (await r.text())[:200])
            return await r.json(content_type=None)
    except aiohttp.ClientError as e:
        raise GitHubError(url, message=str(e)) from e
