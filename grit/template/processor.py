"""
Процессор шаблонов.

Публичный API движка: компиляция исходного текста в неизменяемый
шаблон и рендеринг шаблона в контексте привязок.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import CompileError, RenderError
from .evaluator import TemplateEvaluator, UndefinedPolicy
from .lexer import TemplateLexer
from .nodes import TemplateAST
from .parser import TemplateParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledTemplate:
    """
    Скомпилированный шаблон.

    Неизменяем и может рендериться любое число раз, в том числе
    одновременно из разных потоков с независимыми контекстами.
    """
    name: str
    ast: TemplateAST

    def render(self, context: Mapping[str, Any], strict: bool = False) -> str:
        return render_template(self, context, strict=strict)


def compile_template(source: str, name: str = "<template>") -> CompiledTemplate:
    """
    Компилирует исходный текст шаблона.

    Args:
        source: Текст шаблона
        name: Имя шаблона для диагностики

    Returns:
        Скомпилированный шаблон

    Raises:
        CompileError: При первой же лексической или синтаксической ошибке
    """
    try:
        ast = TemplateParser(TemplateLexer(source)).parse()
    except CompileError as e:
        logger.debug("Failed to compile template '%s': %s", name, e)
        raise

    logger.debug("Compiled template '%s': %d top-level nodes", name, len(ast))
    return CompiledTemplate(name=name, ast=ast)


def render_template(template: CompiledTemplate, context: Mapping[str, Any], strict: bool = False) -> str:
    """
    Рендерит скомпилированный шаблон.

    Args:
        template: Результат compile_template()
        context: Привязки переменных
        strict: Отсутствующая переменная считается ошибкой, а не пустой строкой

    Returns:
        Отрендеренный текст

    Raises:
        RenderError: При ошибке рендеринга
    """
    policy = UndefinedPolicy.STRICT if strict else UndefinedPolicy.LENIENT
    try:
        text = TemplateEvaluator(policy).render(template.ast, context)
    except RenderError as e:
        logger.debug("Failed to render template '%s': %s", template.name, e)
        raise

    logger.debug("Rendered template '%s' (%s): %d chars", template.name, policy.value, len(text))
    return text


__all__ = ["CompiledTemplate", "compile_template", "render_template"]
