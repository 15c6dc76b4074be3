class BaseUrlMissingError(Exception):
    def __init__(
        self,
        message="No base URL configured. Pass base_url to RestClient or set the RESTLINE_BASE_URL environment variable.",
    ):
        self.message = message
        super().__init__(self.message)
