import threading
from collections import OrderedDict
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterator, List, Optional
from .constants import Difficulty
from .models import AnswerRecord, Question

def _utcnow() -> datetime:
	return datetime.now(timezone.utc)

class Session:
	def __init__(self, session_id: str, difficulty: Difficulty, question_quantity: int, questions: List[Question], hints_available: int, started_at: Optional[datetime] = None) -> None:
		self.id = session_id
		self.difficulty = difficulty
		self.question_quantity = question_quantity
		self.hints_available = hints_available
		self.questions = questions
		self.current_question_index = 0
		self.answers: List[AnswerRecord] = []
		self.started_at = started_at or _utcnow()

	def find_question(self, question_id: int) -> Optional[Question]:
		return next((q for q in self.questions if q.id == question_id), None)

	def find_answer(self, question_id: int) -> Optional[AnswerRecord]:
		return next((a for a in self.answers if a.question_id == question_id), None)

	@property
	def is_complete(self) -> bool:
		return len(self.answers) == self.question_quantity

class SessionStore:
	"""In-memory session table.

	Table reads and writes go through ``_lock``; operations on one session are
	serialized with that session's own lock from ``lock_for`` so different
	sessions never wait on each other. Expired sessions are dropped lazily.
	"""

	def __init__(self, ttl_minutes: Optional[int] = None, max_sessions: Optional[int] = None, clock: Callable[[], datetime] = _utcnow) -> None:
		self.sessions: "OrderedDict[str, Session]" = OrderedDict()
		self._session_locks: Dict[str, threading.Lock] = {}
		self._lock = threading.Lock()
		self.ttl = timedelta(minutes=ttl_minutes) if ttl_minutes else None
		self.max_sessions = max_sessions or None
		self.clock = clock

	def create(self, session: Session) -> Session:
		with self._lock:
			self._evict_expired()
			if self.max_sessions is not None:
				while len(self.sessions) >= self.max_sessions:
					oldest_id = next(iter(self.sessions))
					self._remove(oldest_id)
			self.sessions[session.id] = session
			self._session_locks[session.id] = threading.Lock()
		return session

	def get(self, session_id: str) -> Optional[Session]:
		with self._lock:
			session = self.sessions.get(session_id)
			if session is not None and self._is_expired(session):
				self._remove(session_id)
				return None
			return session

	def has_session(self, session_id: str) -> bool:
		return self.get(session_id) is not None

	def delete(self, session_id: str) -> None:
		with self._lock:
			self._remove(session_id)

	@contextmanager
	def lock_for(self, session_id: str) -> Iterator[None]:
		with self._lock:
			lock = self._session_locks.get(session_id)
		if lock is None:
			# Unknown id: nothing to serialize, the caller's lookup will fail
			yield
			return
		with lock:
			yield

	def __len__(self) -> int:
		with self._lock:
			return len(self.sessions)

	def _is_expired(self, session: Session) -> bool:
		return self.ttl is not None and self.clock() - session.started_at > self.ttl

	def _evict_expired(self) -> None:
		expired = [sid for sid, s in self.sessions.items() if self._is_expired(s)]
		for sid in expired:
			self._remove(sid)

	def _remove(self, session_id: str) -> None:
		self.sessions.pop(session_id, None)
		self._session_locks.pop(session_id, None)
