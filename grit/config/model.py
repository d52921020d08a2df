from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..message.commit import COMMIT_MESSAGE_TEMPLATE
from ..message.commit_types import CommitType


@dataclass(frozen=True)
class TemplateCfg:
    # Политика для неизвестных переменных: False = lenient, True = strict
    strict: bool = False
    # Путь к пользовательскому шаблону сообщения (абсолютный после загрузки)
    message: Optional[Path] = None


@dataclass(frozen=True)
class GritConfig:
    types: List[str] = field(default_factory=CommitType.all_names)
    template: TemplateCfg = field(default_factory=TemplateCfg)

    def message_template(self) -> str:
        """Текст шаблона сообщения: пользовательский файл или встроенный шаблон."""
        if self.template.message is None:
            return COMMIT_MESSAGE_TEMPLATE
        return self.template.message.read_text(encoding="utf-8")


__all__ = ["GritConfig", "TemplateCfg"]
