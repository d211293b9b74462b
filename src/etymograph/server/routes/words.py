"""
Word routes: /api/words, /api/random
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from etymograph.core.engine import Engine
from etymograph.core.word_index import normalize
from etymograph.server.deps import get_word_engine


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["words"])


class NodeOut(BaseModel):
    id: str
    word: str
    definition: str
    depth: int
    relatedWords: list[str]


class EdgeOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")


class GraphOut(BaseModel):
    nodes: list[NodeOut]
    edges: list[EdgeOut]


class EntryOut(BaseModel):
    word: str
    definition: str
    relatedWords: list[str]


class RandomOut(BaseModel):
    word: str


@router.get("/random", response_model=RandomOut)
def random_word(engine: Engine = Depends(get_word_engine)):
    """Pick a random word, weighted by number of connections."""
    word = engine.get_random_word()
    if word is None:
        raise HTTPException(status_code=404, detail="No words available in the database.")
    return {"word": word}


@router.get("/words/{word}", response_model=GraphOut, response_model_by_alias=True)
def word_graph(
    word: str,
    depth: str | None = Query(default=None),
    engine: Engine = Depends(get_word_engine),
):
    """Graph of related words around `word`."""
    if not word.strip():
        raise HTTPException(status_code=400, detail="Word parameter is required.")

    try:
        depth = int(depth) if depth is not None else engine.max_depth
        graph = engine.get_graph(word, depth)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid depth parameter. Must be a number between 1 and {engine.max_depth}.",
        )

    if graph.is_empty:
        raise HTTPException(
            status_code=404,
            detail=f"Word '{word}' not found in the etymology database.",
        )

    logger.info("Graph for %r at depth %d: %d nodes, %d edges",
                word, depth, len(graph.nodes), len(graph.edges))
    return graph.to_dict()


@router.get("/words/{word}/entry", response_model=EntryOut)
def word_entry(word: str, engine: Engine = Depends(get_word_engine)):
    """Definition and related words for a single word."""
    entry = engine.get_entry(word)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Word '{word}' not found.")
    return {"word": normalize(word), **entry.to_dict()}
