from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_CSV = Path(__file__).resolve().parent.parent / "data" / "processed" / "properties.csv"


@dataclass(frozen=True)
class ListingsConfig:
    csv_path: Path = Path(os.getenv("REALTY_LISTINGS_CSV", str(_DEFAULT_CSV)))
    list_separator: str = "|"


DEFAULT_LISTINGS_CONFIG = ListingsConfig()
