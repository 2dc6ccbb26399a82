from .check import CheckRunner
from .generate import GenerateRunner

__all__ = ["CheckRunner", "GenerateRunner"]
