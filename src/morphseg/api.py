from __future__ import annotations
from typing import List
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from .analyzer import Analyzer
from .errors import DictionaryUnavailableError, InvalidInputError
from .types import SplitMode


class MorphemeOut(BaseModel):
    begin: int
    end: int
    surface: str
    part_of_speech: List[str]
    part_of_speech_id: int
    dictionary_form: str
    normalized_form: str
    reading_form: str
    is_oov: bool
    word_id: int
    dictionary_id: int


class AnalyzeRequest(BaseModel):
    text: str
    mode: SplitMode = SplitMode.C


def create_app(analyzer: Analyzer) -> FastAPI:
    app = FastAPI(title="morphseg", version="0.1.0")

    @app.get("/")
    def root() -> dict:
        return {
            "name": "morphseg",
            "docs": "/docs",
            "health": "/health",
            "analyze": "/analyze",
        }

    @app.get("/health")
    def health() -> dict:
        return {"ok": True}

    @app.post("/analyze", response_model=List[MorphemeOut])
    def analyze(req: AnalyzeRequest) -> List[MorphemeOut]:
        try:
            morphs = analyzer.analyze(req.text, req.mode)
        except InvalidInputError as e:
            raise HTTPException(status_code=422, detail=str(e))
        except DictionaryUnavailableError as e:
            raise HTTPException(status_code=503, detail=str(e))
        return [MorphemeOut(**m.to_dict()) for m in morphs]

    return app
