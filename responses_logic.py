import enum
import logging
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = "Could you elaborate on that?"

# Встроенные ответы: (слова-триггеры, ответ)
BUILTIN_RESPONSES = [
    (["crash", "crashes"],
     "Well, it never crashes on our system. It must have something\n"
     "to do with your system. Tell me more about your configuration."),
    (["slow"],
     "I think this has to do with your hardware. Upgrading your processor\n"
     "should solve all performance problems. Have you got a problem with\n"
     "our software?"),
    (["performance"],
     "Performance was quite adequate in all our tests. Are you running\n"
     "any other processes in the background?"),
    (["bug", "buggy"],
     "Well, you know, all software has some bugs. But our software engineers\n"
     "are working very hard to fix them. Can you describe the problem a bit\n"
     "further?"),
    (["windows"],
     "This is a known bug to do with the Windows operating system. Please\n"
     "report it to Microsoft. There is nothing we can do about this."),
    (["macintosh"],
     "This is a known bug to do with the Mac operating system. Please\n"
     "report it to Apple. There is nothing we can do about this."),
    (["expensive"],
     "The cost of our product is quite competitive. Have you looked around\n"
     "and really compared our features?"),
    (["installation"],
     "The installation is really quite straight forward. We have tons of\n"
     "wizards that do all the work for you. Have you read the installation\n"
     "instructions?"),
    (["memory"],
     "If you read the system requirements carefully, you will see that the\n"
     "specified memory requirements are 1.5 giga byte. You really should\n"
     "upgrade your memory. Anything else you want to know?"),
    (["linux"],
     "We take Linux support very seriously. But there are some problems.\n"
     "Most have to do with incompatible glibc versions. Can you be a bit\n"
     "more precise?"),
    (["bluej"],
     "Ahhh, BlueJ, yes. We tried to buy out those guys long ago, but\n"
     "they simply won't sell... Stubborn people they are. Nothing we can\n"
     "do about it, I'm afraid."),
]


class TriggerState(enum.Enum):
    ACCUMULATING_KEY = "key"
    ACCUMULATING_BODY = "body"


class DefaultState(enum.Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"


def _is_blank(line: str) -> bool:
    return not line.strip()


def _join(lines: list[str]) -> str:
    return " ".join(lines).strip()


class TriggerRecordParser:
    """
    Разбирает записи вида:

        crash, crashes
        Well, it never crashes on our system...
        (пустая строка)

    Первая строка — слова через запятую, остальные до пустой строки — ответ.
    Конец ввода закрывает запись так же, как пустая строка.
    """

    def __init__(self):
        self.state = TriggerState.ACCUMULATING_KEY
        self.table: dict[str, str] = {}
        self._words: list[str] = []
        self._body: list[str] = []

    def feed(self, line: str) -> None:
        line = line.rstrip("\r\n")
        if _is_blank(line):
            self._close_record()
        elif self.state is TriggerState.ACCUMULATING_KEY:
            self._words = [w.strip() for w in line.split(",") if w.strip()]
            self.state = TriggerState.ACCUMULATING_BODY
        else:
            self._body.append(line)

    def finish(self) -> dict[str, str]:
        self._close_record()
        return self.table

    def _close_record(self) -> None:
        # запись без тела или без слов пропускаем
        if self.state is TriggerState.ACCUMULATING_BODY and self._body:
            response = _join(self._body)
            for word in self._words:
                self.table[word] = response
        self._words = []
        self._body = []
        self.state = TriggerState.ACCUMULATING_KEY


class DefaultResponseParser:
    """Склеивает соседние непустые строки в один ответ."""

    def __init__(self):
        self.state = DefaultState.IDLE
        self.responses: list[str] = []
        self._lines: list[str] = []

    def feed(self, line: str) -> None:
        line = line.rstrip("\r\n")
        if _is_blank(line):
            self._close_response()
        else:
            self._lines.append(line)
            self.state = DefaultState.ACCUMULATING

    def finish(self) -> list[str]:
        self._close_response()
        return self.responses

    def _close_response(self) -> None:
        if self.state is DefaultState.ACCUMULATING:
            text = _join(self._lines)
            if text:
                self.responses.append(text)
        self._lines = []
        self.state = DefaultState.IDLE


def _read_into(path: str | Path, parser) -> bool:
    """Скармливает файл парсеру построчно. False, если чтение сорвалось."""
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            for line in f:
                parser.feed(line)
    except FileNotFoundError:
        logger.error("Unable to open %s", path)
        return False
    except (OSError, UnicodeDecodeError) as e:
        logger.error("A problem was encountered reading %s: %s", path, e)
        return False
    return True


def build_response_map(pairs: Iterable[tuple[Iterable[str], str]]) -> dict[str, str]:
    """Каждое слово из списка получает один и тот же ответ."""
    table = {}
    for words, response in pairs:
        for word in words:
            table[word] = response
    return table


def parse_response_map(lines: Iterable[str]) -> dict[str, str]:
    """Разбирает записи триггеров из готовых строк."""
    parser = TriggerRecordParser()
    for line in lines:
        parser.feed(line)
    return parser.finish()


def load_response_map(path: str | Path) -> dict[str, str]:
    """
    Загружает таблицу триггеров из файла.
    При ошибке остаются только записи, дочитанные до сбоя.
    """
    parser = TriggerRecordParser()
    if not _read_into(path, parser):
        return parser.table
    table = parser.finish()
    logger.debug("Loaded %d trigger words from %s", len(table), path)
    return table


def parse_default_responses(lines: Iterable[str]) -> list[str]:
    """Разбирает ответы по умолчанию из готовых строк."""
    parser = DefaultResponseParser()
    for line in lines:
        parser.feed(line)
    return parser.finish()


def load_default_responses(path: str | Path) -> list[str]:
    """
    Загружает ответы по умолчанию. Список никогда не бывает пустым:
    если из файла ничего не вышло, в нём будет FALLBACK_RESPONSE.
    """
    parser = DefaultResponseParser()
    if _read_into(path, parser):
        responses = parser.finish()
    else:
        responses = parser.responses
    if not responses:
        logger.warning("No default responses in %s, using fallback", path)
        responses.append(FALLBACK_RESPONSE)
    logger.debug("Loaded %d default responses from %s", len(responses), path)
    return responses
