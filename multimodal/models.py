from typing import Optional
from pydantic import BaseModel

class TokenUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

class AnalyzerResponse(BaseModel):
    content: str    # Raw model text, expected to hold the lint JSON
    model: Optional[str] = None
    usage: Optional[TokenUsage] = None
    cached: bool = False
