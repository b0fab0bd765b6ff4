"""In-memory catalog record"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

DEFAULT_CATEGORY = "General"


@dataclass
class CatalogItem:
    """
    One item owned by the CatalogStore

    ai_insights and sentiment hold the dict form of an InsightResult /
    SentimentResult and are only ever written through the store's
    targeted update methods.
    """

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    description: str = ""
    category: str = DEFAULT_CATEGORY
    tags: List[str] = field(default_factory=list)
    ai_insights: Optional[Dict[str, Any]] = None
    sentiment: Optional[Dict[str, Any]] = None
