from fastapi import Request
from sqlmodel import Session
from . import crud
from .service import WordGame


def get_session():
    # one database session per request
    with Session(crud.engine) as session:
        yield session


def get_game(request: Request) -> WordGame:
    return request.app.state.game
