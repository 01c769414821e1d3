"""Process-wide client state, passed explicitly to the services that need it."""

from slate.schemas.catalog import AIModel
from slate.schemas.settings import APIProvider, ProviderCredentials


class ClientState:
    """Credentials, the model catalog and the UI gating flags.

    One instance lives on the application; tests build their own. Mutation
    happens only from coroutines running on the event loop.
    """

    def __init__(self, credentials: ProviderCredentials | None = None):
        self.credentials = credentials or ProviderCredentials()
        self.available_models: list[AIModel] = []
        self.is_loading_models = False
        self.is_sending = False

    @property
    def selected_provider(self) -> APIProvider:
        return self.credentials.selected_provider

    @property
    def active_key(self) -> str:
        return self.credentials.active_key

    def find_model(self, model_id: str) -> AIModel | None:
        # Reads the live list; a concurrent catalog refresh may swap it
        return next((model for model in self.available_models if model.id == model_id), None)

    def model_supports_thinking(self, model_id: str) -> bool:
        model = self.find_model(model_id)
        return model is not None and model.supports_thinking
