from .download_all import archive_path, download_all, download_one, repo_dir_name

__all__ = ["archive_path", "download_all", "download_one", "repo_dir_name"]
