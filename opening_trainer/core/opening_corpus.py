# opening_trainer/core/opening_corpus.py
import logging
import random
from dataclasses import dataclass
from collections import abc
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .position_engine import PositionEngine

logger = logging.getLogger(__name__)


class CorpusDataError(Exception):
    """開局資料本身有問題（空走法、重複 id、無法重播的走法）。"""


def format_moves(moves: Iterable[str]) -> str:
    """以 `1. e4 e5 2. Nf3` 的形式輸出走法。"""
    parts = []
    for i, san in enumerate(moves):
        if i % 2 == 0:
            parts.append(f"{i // 2 + 1}.")
        parts.append(san)
    return " ".join(parts)


@dataclass(frozen=True)
class OpeningRecord:
    id: str
    name: str
    eco: str
    description: str
    moves: Tuple[str, ...]

    def __post_init__(self):
        if not self.moves:
            raise CorpusDataError(f"開局 '{self.id}' 沒有任何走法。")
        # 允許傳入 list，統一轉成 tuple 以保持不可變
        object.__setattr__(self, "moves", tuple(self.moves))

    @classmethod
    def from_dict(cls, raw: Dict) -> "OpeningRecord":
        return cls(
            id=raw["id"],
            name=raw["name"],
            eco=raw.get("eco", ""),
            description=raw.get("description", ""),
            moves=tuple(raw["moves"]),
        )

    @property
    def ply_count(self) -> int:
        return len(self.moves)

    def notation(self) -> str:
        return format_moves(self.moves)


class OpeningCorpus(abc.Sequence):
    """
    唯讀、有序的開局清單。程式啟動時載入一次，之後不再變動；
    順序即開放對局比對時的平手優先順序。
    """

    def __init__(self, records: Iterable[OpeningRecord]):
        self._records: Tuple[OpeningRecord, ...] = tuple(records)
        self._by_id: Dict[str, int] = {}
        for idx, record in enumerate(self._records):
            if record.id in self._by_id:
                raise CorpusDataError(f"開局 id 重複: {record.id}")
            self._by_id[record.id] = idx

    def __getitem__(self, index):
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[OpeningRecord]:
        return iter(self._records)

    def get(self, opening_id: str) -> Optional[OpeningRecord]:
        idx = self._by_id.get(opening_id)
        return self._records[idx] if idx is not None else None

    def next_after(self, opening_id: str) -> OpeningRecord:
        """回傳下一個開局（循環）；找不到 id 時從第一個開始。"""
        if not self._records:
            raise CorpusDataError("開局資料庫是空的。")
        idx = self._by_id.get(opening_id, -1)
        return self._records[(idx + 1) % len(self._records)]

    def random_opening(self, rng: Optional[random.Random] = None) -> OpeningRecord:
        if not self._records:
            raise CorpusDataError("開局資料庫是空的。")
        return (rng or random).choice(self._records)

    def validate(self) -> List[Tuple[OpeningRecord, int]]:
        """
        以規則引擎重播每一條路線，回傳 (開局, 第一個壞掉的 ply) 清單。
        只記錄錯誤，不修正資料。
        """
        broken = []
        for record in self._records:
            replay = PositionEngine.replay(record.moves)
            if replay.error_index is not None:
                bad = record.moves[replay.error_index]
                logger.error(
                    f"開局資料損毀: '{record.name}' ({record.id}) 第 {replay.error_index + 1} 個半步 '{bad}' 無法套用。"
                )
                broken.append((record, replay.error_index))
        return broken


def load_corpus(entries: Iterable[Dict]) -> OpeningCorpus:
    return OpeningCorpus(OpeningRecord.from_dict(raw) for raw in entries)


def load_default_corpus() -> OpeningCorpus:
    """載入內建開局資料庫。"""
    from ..data.openings import OPENINGS
    corpus = load_corpus(OPENINGS)
    logger.info(f"成功載入 {len(corpus)} 個開局。")
    return corpus
