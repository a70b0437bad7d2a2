"""Unit tests for settings."""

from .settings import Settings


def describe_Settings():
    def it_reads_values_from_environment(monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        monkeypatch.setenv("REQUEST_TIMEOUT", "5")

        settings = Settings()

        assert settings.github_token == "env-token"
        assert settings.request_timeout == 5.0

    def it_reads_dotenv_file(monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        (tmp_path / ".env").write_text("GITHUB_TOKEN=file-token\n")

        assert Settings().github_token == "file-token"

    def it_defaults_to_public_api(monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("GITHUB_API_URL", raising=False)

        assert Settings().github_api_url == "https://api.github.com"
