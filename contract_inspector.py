#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Tuple

from forge_tools import ForgeToolchain

PRAGMA_RE = re.compile(r"^pragma solidity ([^;]+);")


def get_pragma_version(contract_path: Path) -> Optional[str]:
    """Return the raw constraint of the first `pragma solidity ...;` line, e.g. '^0.8.19'."""
    with open(contract_path, "r", encoding="utf-8", errors="ignore") as f:
        for line in f:
            m = PRAGMA_RE.match(line)
            if m:
                return m.group(1)
    return None


def contract_name_from_path(contract_path: str) -> str:
    # "src/token/Vault.sol" -> "Vault"
    file_name = contract_path.split("/")[-1]
    return file_name.split(".")[0]


def get_contract_bytecode(contract_path: str, repo_path: Path, toolchain: ForgeToolchain) -> Tuple[str, str]:
    contract_name = contract_name_from_path(contract_path)
    res = toolchain.inspect_bytecode(contract_name, cwd=repo_path)
    bytecode = (res.stdout or "").replace("\n", "")
    return contract_name, bytecode
