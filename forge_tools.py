#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
git / forge invocations used to materialize a contest repository.

All process spawning goes through ForgeToolchain so the scraper can be driven
with a fake toolchain in tests. Failing to spawn a tool is fatal
(ToolchainError); non-zero exits are mostly logged and left to the caller.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

FOUNDRY_CONFIG = "foundry.toml"


class ToolchainError(RuntimeError):
    pass


class ForgeToolchain:
    def __init__(self, git: str = "git", forge: str = "forge"):
        self.git = git
        self.forge = forge

    def run(self, cmd: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
        logging.debug(f"$ {' '.join(cmd)} (cwd={cwd or '.'})")
        try:
            return subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise ToolchainError(f"failed to execute {cmd[0]}: {e}") from e

    def clone(self, url: str, dest: Path) -> subprocess.CompletedProcess:
        return self.run([self.git, "clone", url, str(dest)])

    def install(self, cwd: Path) -> subprocess.CompletedProcess:
        return self.run([self.forge, "install"], cwd=cwd)

    def build(self, cwd: Path) -> subprocess.CompletedProcess:
        return self.run([self.forge, "build"], cwd=cwd)

    def inspect_bytecode(self, contract_name: str, cwd: Path) -> subprocess.CompletedProcess:
        return self.run([self.forge, "inspect", contract_name, "bytecode"], cwd=cwd)


def clone_repo(repo_name: str, toolchain: ForgeToolchain, org: str, workdir: Path = Path(".")) -> Path:
    dest = workdir / repo_name
    url = f"https://github.com/{org}/{repo_name}.git"
    logging.info(f"⬇️ Cloning {repo_name} repository…")
    res = toolchain.clone(url, dest)
    if res.returncode != 0:
        if dest.exists():
            logging.warning(f"⚠️ git clone exited {res.returncode}, reusing existing {dest}")
            return dest
        raise ToolchainError(f"git clone {url} failed: {(res.stderr or '').strip()[:300]}")
    logging.info("✅ Repository cloned successfully!")
    return dest


def compile_contracts(path: Path, toolchain: ForgeToolchain) -> bool:
    if not (path / FOUNDRY_CONFIG).exists():
        logging.info(f"No {FOUNDRY_CONFIG} file found in {path}")
        return False

    logging.info("🔨 Compiling contracts...")
    res = toolchain.install(path)
    if res.returncode != 0:
        logging.warning(f"⚠️ forge install exited {res.returncode}: {(res.stderr or '').strip()[:300]}")
    res = toolchain.build(path)
    if res.returncode != 0:
        logging.warning(f"⚠️ forge build exited {res.returncode}: {(res.stderr or '').strip()[:300]}")
    else:
        logging.info("✅ Contracts compiled successfully!")
    return True
