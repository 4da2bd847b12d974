"""
School repository: directory listing, search, popularity and the lookup
tables shown on school pages.
"""

from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from constants import Defaults, MatchMode
from models import Application, ProcessType, RatingType, School, User
from .base_repository import BaseRepository
from .query import Ordering, QueryDescriptor
from .school_specifications import (
    ApplicationsForSchoolSpec,
    NameEqualsSpec,
    SchoolNameMatchesSpec,
    SchoolNamedSpec,
    UsedByDefaultSpec,
)
from .specifications import FieldMatchesSpec

logger = logging.getLogger(__name__)


class SchoolRepository(BaseRepository[School]):
    """Repository for School model operations."""

    def __init__(
        self,
        db: Session,
        autocomplete_max: int = Defaults.AUTOCOMPLETE_MAX,
        max_page_size: int = Defaults.MAX_PAGE_SIZE,
        interested_users_max: int = Defaults.INTERESTED_USERS_MAX,
    ):
        super().__init__(db, School, max_page_size=max_page_size)
        self.autocomplete_max = autocomplete_max
        self.interested_users_max = interested_users_max

    @property
    def autocomplete_max(self) -> int:
        """Number of rows returned by typeahead lookups."""
        return self._autocomplete_max

    @autocomplete_max.setter
    def autocomplete_max(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"autocomplete_max must be positive: {value}")
        self._autocomplete_max = value

    def get_all_schools(self, start: int, max: int) -> List[School]:
        """
        Page through all schools, most popular first.

        Args:
            start: Number of schools to skip
            max: Maximum number of schools to return

        Returns:
            List of schools ordered by descending popularity
        """
        descriptor = self.descriptor().ordered_by(
            Ordering.desc('popularity_counter'), Ordering.asc('name')
        ).with_page(start, max)
        return self.fetch(descriptor)

    def get_schools_matching(
        self,
        pattern: str,
        start: int,
        max: int,
        match_mode: MatchMode = MatchMode.ANYWHERE
    ) -> List[School]:
        """
        Case-insensitive name search, alphabetical.

        Args:
            pattern: Text to look for in the school name (wildcards are literal)
            start: Number of schools to skip
            max: Maximum number of schools to return
            match_mode: ANYWHERE for general search, START for typeahead

        Returns:
            Matching schools ordered by name
        """
        descriptor = self.descriptor(SchoolNameMatchesSpec(pattern, match_mode)).ordered_by(
            Ordering.asc('name')
        ).with_page(start, max)
        return self.fetch(descriptor)

    def search_schools(self, pattern: str, start: int, max: int) -> List[School]:
        return self.get_schools_matching(pattern, start, max, MatchMode.ANYWHERE)

    def autocomplete_schools(self, pattern: str) -> List[School]:
        """Typeahead: schools whose name starts with pattern, capped at autocomplete_max."""
        return self.get_schools_matching(pattern, 0, self.autocomplete_max, MatchMode.START)

    def count_schools_matching(self, pattern: str, match_mode: MatchMode = MatchMode.ANYWHERE) -> int:
        return self.count(self.descriptor(SchoolNameMatchesSpec(pattern, match_mode)))

    def get_school_from_name(self, name: str) -> Optional[School]:
        """
        Look up a school by exact name.

        Raises:
            IncorrectResultSizeError: If several schools share the name
        """
        return self.find_unique(SchoolNamedSpec(name))

    def get_default_process_types(self) -> List[ProcessType]:
        descriptor = QueryDescriptor(ProcessType, UsedByDefaultSpec(ProcessType)).ordered_by(
            Ordering.asc('id')
        )
        return self.fetch(descriptor)

    def get_default_rating_types(self) -> List[RatingType]:
        descriptor = QueryDescriptor(RatingType, UsedByDefaultSpec(RatingType)).ordered_by(
            Ordering.asc('id')
        )
        return self.fetch(descriptor)

    def get_process_for_name(self, name: str) -> Optional[ProcessType]:
        """
        Look up a process type by exact name.

        Raises:
            IncorrectResultSizeError: If several process types share the name
        """
        return self.find_unique(NameEqualsSpec(ProcessType, name), model=ProcessType)

    def match_process_type(self, query_string: str) -> List[ProcessType]:
        """Typeahead over process type names, matching anywhere in the name."""
        descriptor = QueryDescriptor(
            ProcessType, FieldMatchesSpec(ProcessType, 'name', query_string, MatchMode.ANYWHERE)
        ).ordered_by(Ordering.asc('name')).with_page(0, self.autocomplete_max)
        return self.fetch(descriptor)

    def increment_school_popularity(self, school: School) -> int:
        """
        Add one to a school's popularity counter.

        Issued as a single UPDATE scoped by id so concurrent increments are
        never lost; the row is not read first.

        Args:
            school: School whose counter should grow

        Returns:
            Number of rows updated (0 if the school no longer exists)
        """
        updated = self.db.query(School).filter(School.id == school.id).update(
            {School.popularity_counter: School.popularity_counter + 1},
            synchronize_session=False,
        )
        if school in self.db:
            self.db.expire(school, ['popularity_counter'])
        logger.debug(f"Incremented popularity for school {school.id} ({updated} row)")
        return updated

    def get_users_interested_in(self, school: School, max: Optional[int] = None) -> List[User]:
        """
        Users who have an application to the school.

        Args:
            school: School to look up
            max: Maximum number of users (defaults to interested_users_max)

        Returns:
            Distinct users in application order
        """
        if max is None:
            max = self.interested_users_max
        descriptor = QueryDescriptor(Application, ApplicationsForSchoolSpec(school.id)).ordered_by(
            Ordering.asc('created_at'), Ordering.asc('id')
        ).with_page(0, max)

        users: List[User] = []
        seen = set()
        for application in self.fetch(descriptor):
            if application.user_id not in seen:
                seen.add(application.user_id)
                users.append(application.user)
        return users
