"""Services for LexiDaily."""
from .llm_client import LLMClient, LLMResponse, LLMError, LLMClientError
from .generation_logger import GenerationLogger
from .word_detail_generator import WordDetailGenerator
from .daily_words import DailyWordSelector
from .document_paginator import DocumentPaginator, ExportResult, ExportError, ExportEmptyError, ExportRenderError
from .word_actions import WordActions, HostCapabilities, SharePayload, clipboard_text, share_payload

__all__ = ['LLMClient', 'LLMResponse', 'LLMError', 'LLMClientError', 'GenerationLogger', 'WordDetailGenerator', 'DailyWordSelector', 'DocumentPaginator', 'ExportResult', 'ExportError', 'ExportEmptyError', 'ExportRenderError', 'WordActions', 'HostCapabilities', 'SharePayload', 'clipboard_text', 'share_payload']
