"""
Лексический анализатор шаблонов.

Разбивает исходный текст шаблона на конечный поток токенов. Поток ленивый:
каждый вызов next() продвигает курсор по входу ровно один раз,
перезапуск не поддерживается.
"""

from __future__ import annotations

import re
from collections import deque
from typing import Deque, Iterator, List, Tuple

from .errors import InvalidIdentifier, UnterminatedDelimiter
from .tokens import DelimiterKind, Token, TokenType

# Путь идентификатора: сегменты из букв, цифр и подчёркиваний через точку
IDENTIFIER_PATH = re.compile(r'[A-Za-z0-9_]+(?:\.[A-Za-z0-9_]+)*')


class TemplateLexer:
    """
    Лексический анализатор шаблонов.

    Учитывает три вида разделителей:
    - {{ ... }} подстановка переменной
    - {% ... %} управляющий тег (if / for / end)
    - {# ... #} комментарий, отбрасывается целиком

    Всё вне разделителей выдаётся как TEXT без каких-либо изменений.
    """

    # Начало любого разделителя
    _OPENING = re.compile(r'\{[{%#]')
    _LEADING_WS = re.compile(r'\s*')

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

        # Токены одного тега выдаются по одному через очередь
        self._pending: Deque[Token] = deque()
        self._finished = False

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        while not self._pending:
            if self._finished:
                raise StopIteration
            self._scan()
        return self._pending.popleft()

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь оставшийся текст и возвращает список токенов.
        """
        return list(self)

    def _scan(self) -> None:
        """Сканирует следующий фрагмент входа и кладёт его токены в очередь."""
        if self.position >= self.length:
            self._emit(TokenType.EOF, "", self.position, self.line, self.column)
            self._finished = True
            return

        match = self._OPENING.search(self.text, self.position)
        if match is None or match.start() > self.position:
            text_end = match.start() if match else self.length
            self._scan_text(text_end)
            return

        kind = DelimiterKind.by_opening(match.group(0))
        if kind is DelimiterKind.VARIABLE:
            self._scan_variable()
        elif kind is DelimiterKind.CONTROL:
            self._scan_control()
        else:
            self._scan_comment()

    def _scan_text(self, end: int) -> None:
        start_pos, start_line, start_column = self.position, self.line, self.column
        value = self.text[self.position:end]
        self._advance(len(value))
        self._emit(TokenType.TEXT, value, start_pos, start_line, start_column)

    def _scan_variable(self) -> None:
        """Обрабатывает {{ path }}."""
        content, close = self._open_tag(DelimiterKind.VARIABLE, TokenType.VAR_OPEN)

        self._skip_leading_whitespace(content)
        ident = content.strip()
        if not IDENTIFIER_PATH.fullmatch(ident):
            raise InvalidIdentifier(ident, self.line, self.column)
        self._emit(TokenType.IDENTIFIER, ident, self.position, self.line, self.column)

        self._close_tag(DelimiterKind.VARIABLE, TokenType.VAR_CLOSE, close)

    def _scan_control(self) -> None:
        """
        Обрабатывает {% keyword expression %}.

        Первое слово становится KEYWORD, остаток (если есть) EXPRESSION.
        Выражение здесь не разбирается, это задача парсера.
        """
        content, close = self._open_tag(DelimiterKind.CONTROL, TokenType.CONTROL_OPEN)

        self._skip_leading_whitespace(content)
        parts = content.split(None, 1)
        word = parts[0] if parts else ""
        self._emit(TokenType.KEYWORD, word, self.position, self.line, self.column)
        self._advance(len(word))

        tail = parts[1].strip() if len(parts) > 1 else ""
        if tail:
            rest = self.text[self.position:close]
            self._advance(len(rest) - len(rest.lstrip()))
            self._emit(TokenType.EXPRESSION, tail, self.position, self.line, self.column)

        self._close_tag(DelimiterKind.CONTROL, TokenType.CONTROL_CLOSE, close)

    def _scan_comment(self) -> None:
        """Комментарий {# ... #} пропускается без выдачи токенов."""
        kind = DelimiterKind.COMMENT
        close = self._find_closing(kind)
        self._advance(close + len(kind.closing) - self.position)

    def _open_tag(self, kind: DelimiterKind, open_type: TokenType) -> Tuple[str, int]:
        """Выдаёт открывающий токен тега, возвращает содержимое и позицию закрытия."""
        close = self._find_closing(kind)
        self._emit(open_type, kind.opening, self.position, self.line, self.column)
        self._advance(len(kind.opening))
        return self.text[self.position:close], close

    def _close_tag(self, kind: DelimiterKind, close_type: TokenType, close: int) -> None:
        self._advance(close - self.position)
        self._emit(close_type, kind.closing, self.position, self.line, self.column)
        self._advance(len(kind.closing))

    def _find_closing(self, kind: DelimiterKind) -> int:
        close = self.text.find(kind.closing, self.position + len(kind.opening))
        if close == -1:
            raise UnterminatedDelimiter(kind, self.line, self.column)
        return close

    def _skip_leading_whitespace(self, content: str) -> None:
        match = self._LEADING_WS.match(content)
        self._advance(match.end() if match else 0)

    def _emit(self, token_type: TokenType, value: str, position: int, line: int, column: int) -> None:
        self._pending.append(Token(token_type, value, position, line, column))

    def _advance(self, count: int) -> None:
        """
        Перемещает позицию на указанное количество символов,
        обновляя номера строк и колонок.
        """
        for _ in range(count):
            if self.position < self.length:
                if self.text[self.position] == '\n':
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.position += 1


def tokenize_template(text: str) -> List[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона

    Returns:
        Список токенов, завершающийся EOF

    Raises:
        UnterminatedDelimiter: Открывающий разделитель без пары
        InvalidIdentifier: Некорректный путь в {{ ... }}
    """
    return TemplateLexer(text).tokenize()


__all__ = ["TemplateLexer", "tokenize_template", "IDENTIFIER_PATH"]
