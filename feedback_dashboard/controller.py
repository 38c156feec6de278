"""
Dashboard controller: issues the read queries and holds their results
"""

import logging
import threading
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from .models import FeedbackRecord, StoredItem, UserProfile
from .utils.queries import all_users_query, feedback_query, items_query, recent_users_query

logger = logging.getLogger(__name__)

USERS_ERROR = 'Failed to load users'
DATA_ERROR = 'Failed to load data'


class UserNotFoundError(LookupError):
    """Selected email does not match any loaded user"""

    def __init__(self, email):
        super().__init__('User not found')
        self.email = email


@dataclass
class DashboardState:
    latest_users: List[UserProfile] = field(default_factory=list)
    users: List[UserProfile] = field(default_factory=list)
    selected_email: Optional[str] = None
    feedback: List[FeedbackRecord] = field(default_factory=list)
    items: List[StoredItem] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None


class DashboardController:
    """
    Owns one viewer's state and the three read flows against the table client.

    Detail loads are tagged with a generation number; a response is applied
    only if no newer load or selection change happened while it was in flight.
    """

    def __init__(self, client, page_size=None):
        self.client = client
        self.page_size = page_size
        self.state = DashboardState()
        self._lock = threading.Lock()
        self._generation = 0

    def load_recent_users(self):
        """Fetch the newest users; failures are logged and leave state untouched"""
        try:
            rows = self.client.fetch(recent_users_query())
        except Exception as e:
            logger.error(f"Failed to fetch latest users: {e}")
            return self.state.latest_users

        latest = [UserProfile.from_row(row) for row in rows]
        with self._lock:
            self.state.latest_users = latest
        return latest

    def load_all_users(self):
        """Fetch every user ordered by email, then refresh the current selection"""
        try:
            rows = self.client.fetch(all_users_query())
        except Exception:
            logger.exception("Failed to fetch users")
            with self._lock:
                self.state.error = USERS_ERROR
            return self.state.users

        users = [UserProfile.from_row(row) for row in rows]
        with self._lock:
            self.state.users = users
            selected = self.state.selected_email

        # the loaded-users set changed, so the selection has to be resolved again
        if selected:
            self.load_user_detail(selected)
        return users

    def select_user(self, email):
        """Change the selection; an empty value returns the controller to idle"""
        with self._lock:
            self.state.selected_email = email or None
            if not email:
                self._generation += 1
                self.state.loading = False
                return False
        return self.load_user_detail(email)

    def find_user(self, email):
        for user in self.state.users:
            if user.email == email:
                return user
        raise UserNotFoundError(email)

    def load_user_detail(self, email, page=0):
        """
        Load feedback and stored items for the user owning ``email``.

        Both queries run in parallel and must both succeed; otherwise the
        previous records stay in place and the error message is set.

        Returns:
            bool: True if the records were replaced
        """
        if not email:
            return False

        with self._lock:
            self._generation += 1
            generation = self._generation
            self.state.loading = True
            self.state.error = None

        try:
            user = self.find_user(email)
            feedback_rows, item_rows = self._fetch_detail(user.user_id, page)
            feedback = [FeedbackRecord.from_row(row) for row in feedback_rows]
            items = [StoredItem.from_row(row) for row in item_rows]
        except UserNotFoundError as e:
            logger.error(f"Failed to load data for {email}: {e}")
            self._fail(generation)
            return False
        except Exception:
            logger.exception(f"Failed to load data for {email}")
            self._fail(generation)
            return False

        with self._lock:
            if not self._is_current(generation):
                logger.debug(f"Discarding superseded response for {email}")
                return False
            self.state.feedback = feedback
            self.state.items = items
            self.state.loading = False
        return True

    def _fail(self, generation):
        with self._lock:
            if self._is_current(generation):
                self.state.error = DATA_ERROR
                self.state.loading = False

    def _fetch_detail(self, user_id, page):
        with ThreadPoolExecutor(max_workers=2) as pool:
            feedback_future = pool.submit(self.client.fetch, feedback_query(user_id, page, self.page_size))
            items_future = pool.submit(self.client.fetch, items_query(user_id, page, self.page_size))
            # wait for both before raising so neither request is left dangling
            feedback_error = feedback_future.exception()
            items_error = items_future.exception()
        if feedback_error is not None:
            raise feedback_error
        if items_error is not None:
            raise items_error
        return feedback_future.result(), items_future.result()

    def _is_current(self, generation):
        return generation == self._generation


class ControllerRegistry:
    """Maps browser session ids to controllers, evicting the least recently used"""

    def __init__(self, client, page_size=None, max_sessions=256):
        self.client = client
        self.page_size = page_size
        self.max_sessions = max_sessions
        self._controllers = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id):
        with self._lock:
            controller = self._controllers.get(session_id)
            if controller is None:
                controller = DashboardController(self.client, page_size=self.page_size)
                self._controllers[session_id] = controller
                while len(self._controllers) > self.max_sessions:
                    evicted, _ = self._controllers.popitem(last=False)
                    logger.info(f"Evicted dashboard session {evicted}")
            else:
                self._controllers.move_to_end(session_id)
            return controller

    def __len__(self):
        return len(self._controllers)
