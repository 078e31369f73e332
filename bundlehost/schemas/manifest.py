from pydantic import BaseModel, Field, TypeAdapter
from typing import List


class FileDescriptor(BaseModel):
  """One file of an extracted bundle, as listed in its manifest"""
  url: str
  size: int = Field(..., ge=0)
  hash: str
  path: str


Manifest = List[FileDescriptor]

manifest_adapter = TypeAdapter(Manifest)
