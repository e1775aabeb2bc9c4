from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

DATA_PATH = Path(__file__).resolve().parent / "data" / "printer_models.json"
DEFAULT_MODEL_NO = "EM5820"


@dataclass(frozen=True)
class PrinterModel:
    model_no: str
    vendor_id: int
    product_id: int
    interface: int = 0
    endpoint_in: int = 0x81
    endpoint_out: int = 0x03
    dot_width: int = 384
    write_timeout_ms: int = 5000
    drain_timeout_ms: int = 100
    drain_chunk_size: int = 64
    batch_lines: int = 50
    baud_rate: int = 115200


class PrinterModelRegistry:
    _cache: Dict[Path, "PrinterModelRegistry"] = {}

    def __init__(self, models: Iterable[PrinterModel]) -> None:
        self._models = list(models)

    @classmethod
    def load(cls, path: Path = DATA_PATH) -> "PrinterModelRegistry":
        key = path.resolve()
        cached = cls._cache.get(key)
        if cached:
            return cached
        raw = json.loads(path.read_text(encoding="utf-8"))
        models = [PrinterModel(**item) for item in raw]
        registry = cls(models)
        cls._cache[key] = registry
        return registry

    @property
    def models(self) -> List[PrinterModel]:
        return list(self._models)

    def get(self, model_no: str) -> Optional[PrinterModel]:
        target = model_no.lower()
        for model in self._models:
            if model.model_no.lower() == target:
                return model
        return None

    def require(self, model_no: Optional[str]) -> PrinterModel:
        model = self.get(model_no or DEFAULT_MODEL_NO)
        if not model:
            raise RuntimeError(f"Unknown printer model '{model_no}'")
        return model


def default_model() -> PrinterModel:
    return PrinterModelRegistry.load().require(DEFAULT_MODEL_NO)
