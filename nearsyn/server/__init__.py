"""nearsyn FastAPI Server"""
from .client import NearSynClient

__all__ = ['NearSynClient']
