# wcag_graph/configs/config.py
import yaml
from pathlib import Path
from functools import lru_cache


class Config:
    """
    Configuration for the WCAG documentation graph build.
    """

    # 1. Setup Base Paths
    # This points to wcag_graph/configs/
    CONFIG_DIR = Path(__file__).parent.resolve()
    # This points to the wcag_graph package
    PACKAGE_ROOT = CONFIG_DIR.parent

    # 2. Define File Paths
    BUILD_CONFIG_PATH = CONFIG_DIR / "build.yaml"

    @classmethod
    @lru_cache
    def load_build_config(cls) -> dict:
        """Loads the YAML configuration describing the source tree layout."""
        if not cls.BUILD_CONFIG_PATH.exists():
            raise FileNotFoundError(f"Missing config at {cls.BUILD_CONFIG_PATH}")

        with open(cls.BUILD_CONFIG_PATH, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)

    @classmethod
    def get_corpus_path(cls, source_root: Path, corpus: str) -> Path:
        """Returns the directory holding a document corpus ("guidelines" or "techniques")."""
        corpora = cls.load_build_config()["corpora"]
        if corpus not in corpora:
            raise ValueError(
                f"Unknown corpus '{corpus}'. Valid corpora are: {list(corpora.keys())}"
            )
        return Path(source_root) / corpora[corpus]

    @classmethod
    def get_document_path(cls, source_root: Path, document: str) -> Path:
        """Returns the path of a single named source document ("index" or "act_mapping")."""
        documents = cls.load_build_config()["documents"]
        if document not in documents:
            raise ValueError(
                f"Unknown document '{document}'. Valid documents are: {list(documents.keys())}"
            )
        return Path(source_root) / documents[document]

    @classmethod
    def get_discovery_pattern(cls) -> str:
        """Returns the two-segment glob used to discover corpus documents."""
        return cls.load_build_config()["discovery"]["pattern"]
