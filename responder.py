import logging
import os
import random
from types import MappingProxyType
from typing import Iterable

from dotenv import load_dotenv

from responses_logic import (
    BUILTIN_RESPONSES, build_response_map, load_default_responses, load_response_map
)

# Загрузка переменных окружения
load_dotenv()
FILE_OF_DEFAULT_RESPONSES = os.getenv("DEFAULT_RESPONSES_PATH", "default2.txt")
# Если не задан, используются встроенные ответы
FILE_OF_KEYS_AND_VALUES = os.getenv("RESPONSE_MAP_PATH")

logger = logging.getLogger(__name__)


class Responder:
    """
    Генератор ответов. На вход — набор слов, на выход — строка.

    Если какое-то слово есть в таблице триггеров, возвращается его ответ.
    Иначе — случайный ответ из списка по умолчанию.
    """

    def __init__(self,
                 response_map_path=FILE_OF_KEYS_AND_VALUES,
                 default_responses_path=FILE_OF_DEFAULT_RESPONSES,
                 random_generator: random.Random | None = None):
        if response_map_path is None:
            table = build_response_map(BUILTIN_RESPONSES)
        else:
            table = load_response_map(response_map_path)
        self.response_map = MappingProxyType(table)
        self.default_responses = tuple(load_default_responses(default_responses_path))
        self.random_generator = random_generator or random.Random()
        logger.info("Responder ready: %d trigger words, %d default responses",
                    len(self.response_map), len(self.default_responses))

    def generate_response(self, words: Iterable[str]) -> str:
        # первое найденное слово выигрывает; порядок задаёт сама коллекция
        for word in words:
            response = self.response_map.get(word)
            if response is not None:
                return response
        return self.pick_default_response()

    def pick_default_response(self) -> str:
        index = self.random_generator.randrange(len(self.default_responses))
        return self.default_responses[index]
