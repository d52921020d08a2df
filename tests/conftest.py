import logging
from pathlib import Path

import pytest

from tests.infrastructure.config_builders import create_grit_yaml
from tests.infrastructure.file_utils import write


@pytest.fixture
def tmpproj(tmp_path: Path):
    """Минимальный репозиторий: .grit.yaml + шаблон сообщения в .grit/."""
    root = tmp_path
    write(
        root / ".grit" / "message.tpl",
        "{{ type }}{% if scope %}[{{ scope }}]{% end %}: {{ description }}\n",
    )
    create_grit_yaml(root, types=["feat", "fix", "docs"], message=".grit/message.tpl")
    return root


@pytest.fixture(autouse=True)
def _no_debug_logging(monkeypatch):
    # GRIT_DEBUG из окружения разработчика не должен влиять на вывод CLI в тестах
    monkeypatch.delenv("GRIT_DEBUG", raising=False)


@pytest.fixture(autouse=True)
def _restore_grit_logger():
    # main() вешает StreamHandler на текущий sys.stderr; после capsys поток закрыт
    logger = logging.getLogger("grit")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
