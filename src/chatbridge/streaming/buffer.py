"""
Буферизация стриминга и обработка UTF-8 на границах чанков
"""
import codecs
from typing import Union

from ..core.logging import logger


class StreamBuffer:
    """
    Буфер одного стримингового запроса.

    Декодирует байты инкрементально (многобайтные символы могут быть
    разрезаны между чтениями) и хранит неполный хвостовой фрейм до
    следующего чтения.
    """

    def __init__(self, max_buffer_size: int = 1024 * 1024):
        """
        Инициализация буфера

        Args:
            max_buffer_size: Максимальный размер неразобранного хвоста в символах
        """
        self.max_buffer_size = max_buffer_size
        self.utf8_decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')
        self.pending = ""

    def feed(self, chunk: Union[bytes, str]) -> str:
        """
        Добавляет новый чанк и возвращает весь текст, готовый к разбору

        Args:
            chunk: Сырые данные одного сетевого чтения

        Returns:
            Неразобранный хвост предыдущего чтения + декодированный чанк
        """
        if isinstance(chunk, bytes):
            chunk = self.utf8_decoder.decode(chunk, final=False)
        text = self.pending + chunk
        self.pending = ""
        return text

    def keep(self, remainder: str):
        """
        Сохраняет неразобранный хвост до следующего чтения

        Args:
            remainder: Хвост, возвращенный парсером
        """
        if len(remainder) > self.max_buffer_size:
            # Отбрасываем половину буфера при переполнении
            logger.warning("Stream buffer overflow, discarding buffered data", buffered_chars=len(remainder))
            remainder = remainder[len(remainder) // 2:]
        self.pending = remainder

    def get_remaining_data(self) -> str:
        """Возвращает оставшиеся данные, включая недекодированные байты"""
        return self.pending + self.utf8_decoder.decode(b"", final=True)
