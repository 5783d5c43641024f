#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
In-memory aggregate of one scraping run and its on-disk exports.

Contests -> Contest -> Contract, appended in discovery order. The JSON export
is the primary output (overwritten each run); the CSV is a flat per-contract
summary for quick auditing.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List

import pandas as pd

DEFAULT_OUT = Path("contest_info.json")

CSV_COLS = ["contest", "contract", "pragma_version", "bytecode_size"]


@dataclass(frozen=True)
class Contract:
    name: str
    bytecode: str
    pragma_version: str

    @classmethod
    def from_dict(cls, d: dict) -> "Contract":
        return cls(name=d["name"], bytecode=d["bytecode"], pragma_version=d["pragma_version"])


@dataclass
class Contest:
    name: str
    contracts: List[Contract] = field(default_factory=list)

    def add_contract(self, contract: Contract) -> None:
        self.contracts.append(contract)

    @classmethod
    def from_dict(cls, d: dict) -> "Contest":
        return cls(name=d["name"], contracts=[Contract.from_dict(c) for c in d.get("contracts", [])])


@dataclass
class Contests:
    contests: List[Contest] = field(default_factory=list)

    def add_contest(self, contest: Contest) -> None:
        self.contests.append(contest)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "Contests":
        return cls(contests=[Contest.from_dict(c) for c in d.get("contests", [])])


def export_contest_info(contests: Contests, path: Path = DEFAULT_OUT) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    # "w" truncates whatever a previous run left behind
    with open(path, "w", encoding="utf-8") as f:
        json.dump(contests.to_dict(), f, indent=2)
    return path


def load_contest_info(path: Path = DEFAULT_OUT) -> Contests:
    with open(path, "r", encoding="utf-8") as f:
        return Contests.from_dict(json.load(f))


def bytecode_size(bytecode: str) -> int:
    hex_body = bytecode[2:] if bytecode.startswith("0x") else bytecode
    return len(hex_body) // 2


def contracts_frame(contests: Contests) -> pd.DataFrame:
    rows = [
        {
            "contest": contest.name,
            "contract": c.name,
            "pragma_version": c.pragma_version,
            "bytecode_size": bytecode_size(c.bytecode),
        }
        for contest in contests.contests
        for c in contest.contracts
    ]
    return pd.DataFrame(rows, columns=CSV_COLS)


def export_contracts_csv(contests: Contests, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    contracts_frame(contests).to_csv(path, index=False)
    return path
