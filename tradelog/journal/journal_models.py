"""
Journal Data Models
===================

TradeEntry — one manually journaled trade: setup, outcome, notes, screenshot.

Dataclass with to_dict()/from_dict() for the JSON file. Field names are
snake_case in Python and camelCase on disk. Timestamps are ISO-8601 text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from tradelog.store.calendar import as_aware, local_now
from tradelog.store.codec import (
    RecordCodec,
    format_timestamp,
    int_field,
    optional_text_field,
    parse_timestamp,
    text_field,
)
from tradelog.store.record_store import new_record_id
from tradelog.utils.exceptions import RecordDecodeError


# ── Enums ────────────────────────────────────────────────────

class TradeBias(str, Enum):
    BULLISH = "Bullish"
    BEARISH = "Bearish"

    @property
    def display_name(self) -> str:
        return self.value


class EntryModel(str, Enum):
    MARKET = "Market"
    LIMIT = "Limit"

    @property
    def display_name(self) -> str:
        return self.value


class EntryTimeframe(str, Enum):
    ONE_MINUTE = "1"
    FIVE_MINUTES = "5"
    FIFTEEN_MINUTES = "15"
    ONE_HOUR = "1hr"
    FOUR_HOUR = "4hr"

    @property
    def display_name(self) -> str:
        return _TIMEFRAME_DISPLAY[self]

    @property
    def formatted(self) -> str:
        return _TIMEFRAME_SHORT[self]


_TIMEFRAME_DISPLAY = {
    EntryTimeframe.ONE_MINUTE: "1 min",
    EntryTimeframe.FIVE_MINUTES: "5 min",
    EntryTimeframe.FIFTEEN_MINUTES: "15 min",
    EntryTimeframe.ONE_HOUR: "1 hr",
    EntryTimeframe.FOUR_HOUR: "4 hr",
}

_TIMEFRAME_SHORT = {
    EntryTimeframe.ONE_MINUTE: "1m",
    EntryTimeframe.FIVE_MINUTES: "5m",
    EntryTimeframe.FIFTEEN_MINUTES: "15m",
    EntryTimeframe.ONE_HOUR: "1hr",
    EntryTimeframe.FOUR_HOUR: "4hr",
}


class WinLossState(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"
    BREAKEVEN = "BE"


class TradeRating(str, Enum):
    NOT_RATED = "-"
    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @property
    def display_name(self) -> str:
        return self.value


def _enum(cls, value: Any):
    try:
        return cls(value)
    except ValueError:
        raise RecordDecodeError(f"Invalid {cls.__name__} value {value!r}")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TRADE JOURNAL ENTRY
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass
class TradeEntry:
    """
    A single journaled trade.

    Money and points fields are free text exactly as typed; numbers are
    pulled out on demand (see journal_analytics.parse_amount).
    """
    # ── Identity ──
    id: str = field(default_factory=new_record_id)
    date: datetime = field(default_factory=local_now)     # when the trade happened

    # ── Setup ──
    pair: str = "MNQ"
    bias: TradeBias = TradeBias.BULLISH
    entry_model: EntryModel = EntryModel.MARKET
    entry_timeframe: EntryTimeframe = EntryTimeframe.ONE_MINUTE
    risk_contracts: int = 10

    # ── Outcome ──
    win_loss: WinLossState = WinLossState.BREAKEVEN
    profit_loss: str = ""
    points: str = ""
    entry_points: str = ""
    exit_points: str = ""
    risk_reward: str = ""
    rating: TradeRating = TradeRating.NOT_RATED

    # ── Notes ──
    analysis: str = ""
    psychology: str = ""
    image_path: Optional[str] = None                 # blob file name next to the JSON file

    created_at: datetime = field(default_factory=local_now)

    def __post_init__(self):
        self.date = as_aware(self.date)
        self.created_at = as_aware(self.created_at)

    @classmethod
    def empty(cls) -> "TradeEntry":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "id": self.id,
            "date": format_timestamp(self.date),
            "pair": self.pair,
            "bias": self.bias.value,
            "entryModel": self.entry_model.value,
            "entryTimeframe": self.entry_timeframe.value,
            "riskContracts": self.risk_contracts,
            "winLoss": self.win_loss.value,
            "profitLoss": self.profit_loss,
            "points": self.points,
            "entryPoints": self.entry_points,
            "exitPoints": self.exit_points,
            "riskReward": self.risk_reward,
            "rating": self.rating.value,
            "analysis": self.analysis,
            "psychology": self.psychology,
            "createdAt": format_timestamp(self.created_at),
        }
        if self.image_path is not None:
            d["imagePath"] = self.image_path
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TradeEntry":
        try:
            return cls(
                id=text_field(d, "id"),
                date=parse_timestamp(d["date"]),
                pair=text_field(d, "pair"),
                bias=_enum(TradeBias, d["bias"]),
                entry_model=_enum(EntryModel, d["entryModel"]),
                entry_timeframe=_enum(EntryTimeframe, d["entryTimeframe"]),
                risk_contracts=int_field(d, "riskContracts"),
                win_loss=_enum(WinLossState, d["winLoss"]),
                profit_loss=text_field(d, "profitLoss"),
                points=text_field(d, "points"),
                entry_points=text_field(d, "entryPoints"),
                exit_points=text_field(d, "exitPoints"),
                risk_reward=text_field(d, "riskReward"),
                rating=_enum(TradeRating, d["rating"]),
                analysis=text_field(d, "analysis"),
                psychology=text_field(d, "psychology"),
                image_path=optional_text_field(d, "imagePath"),
                created_at=parse_timestamp(d["createdAt"]),
            )
        except KeyError as e:
            raise RecordDecodeError(f"Missing key {e.args[0]!r}")


TRADE_ENTRY_CODEC: RecordCodec[TradeEntry] = RecordCodec(
    to_dict=TradeEntry.to_dict,
    from_dict=TradeEntry.from_dict,
)
