from __future__ import annotations

from typing import Mapping, Optional

from ..common.tasks import ExternalTaskRunner
from ..core.enums import ChatModel
from ..core.exceptions import ValidationError
from .providers import ChatProvider


class ChatService:
    def __init__(self, providers: Mapping[ChatModel, ChatProvider], runner: ExternalTaskRunner):
        self._providers = dict(providers)
        self._runner = runner

    def reply(self, message: Optional[str], model: Optional[str] = None) -> str:
        if not message or not str(message).strip():
            raise ValidationError("Message is required")

        try:
            selected = ChatModel(model) if model else ChatModel.GEMINI
        except ValueError:
            raise ValidationError("Invalid model selected")

        provider = self._providers.get(selected)
        if provider is None:
            raise ValidationError("Invalid model selected")

        text = str(message)
        return self._runner.run(f"chat:{selected.value}", lambda: provider.complete(text)).unwrap()
