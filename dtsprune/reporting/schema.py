from __future__ import annotations
from typing import List
from pydantic import BaseModel, Field

class BlockJSON(BaseModel):
    name: str = Field(..., description="Module name from the string literal")
    has_body: bool = Field(..., description="False for `declare module \"x\";` shorthand blocks")
    dependencies: List[str] = Field(default_factory=list, description="Modules imported inside the block")

class CleanReportJSON(BaseModel):
    file: str = Field(..., description="Path of the cleaned bundle")
    roots: List[str] = Field(..., description="Root module names as given")
    reachable: List[str] = Field(..., description="Roots plus everything they import, transitively")
    kept: List[str] = Field(..., description="Declared modules left in the output")
    removed: List[str] = Field(..., description="Declared modules deleted from the output")
    inlined_references: int = Field(..., ge=0, description="`/// <reference path>` directives processed")
    edits: int = Field(..., ge=0, description="Deletion edits applied")
    written: bool = Field(..., description="Whether the file was rewritten")
