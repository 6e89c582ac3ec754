"""
Извлечение номера контейнера и даты из строки отчёта о выгрузке.

Отчёты вставляются как свободный текст: строки без номера контейнера
считаются шумом.
"""

import re
from dataclasses import dataclass
from typing import Optional


# 4 буквы + 7 цифр, необязательный пробел или дефис между ними (только ASCII)
CONTAINER_ID_PATTERN = re.compile(r"\b([A-Z]{4})[ \-]?(\d{7})\b", re.ASCII)

# DD/MM/YYYY или DD-MM-YYYY
DATE_PATTERN = re.compile(r"\b(\d{2}[/\-]\d{2}[/\-]\d{4})\b", re.ASCII)


@dataclass(frozen=True)
class ParsedLine:
    """Результат разбора одной строки."""
    container_id: str
    raw_line: str
    date: Optional[str] = None


def extract_container_id(text: str) -> Optional[str]:
    """
    Канонический номер контейнера (префикс + цифры, верхний регистр, без
    разделителя) или None.
    """
    if not text:
        return None
    match = CONTAINER_ID_PATTERN.search(text.upper())
    if match is None:
        return None
    return match.group(1) + match.group(2)


def extract_date(text: str) -> Optional[str]:
    """Первый токен даты в строке как есть."""
    if not text:
        return None
    match = DATE_PATTERN.search(text)
    return match.group(1) if match else None


def parse_line(line: str) -> Optional[ParsedLine]:
    container_id = extract_container_id(line)
    if container_id is None:
        return None
    return ParsedLine(container_id=container_id, raw_line=line.strip(), date=extract_date(line))


def canonical_container_id(number: str) -> str:
    """
    Канонический id для номера из манифеста.

    Если номер не похож на ISO 6346, возвращается trim + upper.
    """
    cleaned = (number or "").strip().upper()
    match = CONTAINER_ID_PATTERN.fullmatch(cleaned)
    if match is None:
        return cleaned
    return match.group(1) + match.group(2)
