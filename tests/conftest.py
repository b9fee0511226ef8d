import sys
from pathlib import Path
import pytest
from sqlmodel import SQLModel, create_engine

# Ensure project root is on sys.path so tests can import the `wordguess` package
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


class FixedPick:
	"""Stand-in for random.Random that always picks the given word."""

	def __init__(self, word):
		self.word = word

	def choice(self, seq):
		assert self.word in seq
		return self.word


@pytest.fixture
def engine(tmp_path):
	from wordguess import crud
	db = tmp_path / 'wordguess.db'
	eng = create_engine(f'sqlite:///{db}', connect_args={"check_same_thread": False})
	SQLModel.metadata.create_all(eng)
	crud.engine = eng
	return eng


@pytest.fixture(autouse=True)
def reset_game_state():
	# The app holds one shared game session; start every test from scratch
	try:
		import wordguess.main as main
		original = main.app.state.game
		original.reset()
	except Exception:
		original = None
	yield
	if original is not None:
		main.app.state.game = original
		original.reset()
