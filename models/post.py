from typing import List, Optional

from pydantic import BaseModel, Field


class Like(BaseModel):
    user: str
    date: str


class Comment(BaseModel):
    id: str
    user: str
    text: str
    name: str = ""
    avatar: Optional[str] = None
    date: str


class Post(BaseModel):
    id: Optional[str] = None
    user: str
    text: str
    name: str = ""
    avatar: Optional[str] = None
    date: str
    likes: List[Like] = Field(default_factory=list)
    comments: List[Comment] = Field(default_factory=list)


class PostRequest(BaseModel):
    """Body of post and comment submissions. name/avatar are ignored in favour of the token claims."""
    text: Optional[str] = None
    name: Optional[str] = None
    avatar: Optional[str] = None
