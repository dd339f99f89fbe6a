"""Factory Boy definition for :class:`authgate.models.user.User`."""

from __future__ import annotations

import bcrypt
import factory
from authgate.models.user import User

from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


def hash_password(raw: str) -> str:
    """Hash at the minimum bcrypt cost; tests only need a verifiable hash."""
    return bcrypt.hashpw(raw.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")


class UserFactory(BaseFactory):
    """
    Build persisted :class:`authgate.models.user.User` instances.

    Notes
    -----
    - ``password`` is a post-generation hook: pass ``password="..."`` to get
      a row whose ``password_hash`` verifies against that plaintext.
    """

    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    password_hash = "!"  # replaced in post_generation

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Store a real bcrypt hash of ``extracted`` (or the default password)."""
        obj.password_hash = hash_password(extracted or DEFAULT_PASSWORD)
