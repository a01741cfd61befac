"""
Conversation- and user-scoped state stores backed by the Django ORM.

A store is loaded lazily once per turn and cached on the TurnContext; all
reads and writes during the turn go to that cache. Nothing reaches the
database until ``save_changes`` is called at the end of the turn, and then
only if the encoded state actually changed.
"""
import logging
from copy import deepcopy

from django.db import transaction

from ..exceptions import NullArgumentError
from ..models import ConversationStateRecord, UserStateRecord
from ..serialization import decode, encode, fingerprint

logger = logging.getLogger(__name__)


class CachedBotState:
    def __init__(self, data=None):
        data = data or {}
        self.state = decode(deepcopy(data))
        self.hash = fingerprint(data)

    def is_changed(self):
        return fingerprint(encode(self.state)) != self.hash


class BotState:
    """
    Base class for a key-value store scoped by ``get_storage_key``.
    Subclasses set ``model`` to the Django model holding the JSON data.
    """
    model = None

    def __init__(self):
        self._cache_key = self.__class__.__name__

    def create_property(self, name):
        if not name:
            raise ValueError("A property name is required.")
        return StatePropertyAccessor(self, name)

    def get_storage_key(self, turn_context):
        raise NotImplementedError

    def get_cached_state(self, turn_context):
        return turn_context.turn_state.get(self._cache_key)

    def load(self, turn_context, force=False):
        if turn_context is None:
            raise NullArgumentError('turn_context')

        if force or self.get_cached_state(turn_context) is None:
            queryset = self.model.objects.all()
            if not transaction.get_autocommit():
                # Hold the row for the rest of the turn
                queryset = queryset.select_for_update()
            record = queryset.filter(**self.get_storage_key(turn_context)).first()
            turn_context.turn_state[self._cache_key] = CachedBotState(record.data if record else None)

    def save_changes(self, turn_context, force=False):
        if turn_context is None:
            raise NullArgumentError('turn_context')

        cached = self.get_cached_state(turn_context)
        if cached is None:
            return
        if not (force or cached.is_changed()):
            return

        data = encode(cached.state)
        key = self.get_storage_key(turn_context)
        self.model.objects.update_or_create(defaults={'data': data}, **key)
        cached.hash = fingerprint(data)
        logger.debug(f"{self._cache_key} saved for {key}")

    def clear_state(self, turn_context):
        """Empty the cached state; the next save writes the empty state."""
        if turn_context is None:
            raise NullArgumentError('turn_context')
        cached = CachedBotState()
        cached.hash = None
        turn_context.turn_state[self._cache_key] = cached

    def delete(self, turn_context):
        if turn_context is None:
            raise NullArgumentError('turn_context')
        turn_context.turn_state.pop(self._cache_key, None)
        self.model.objects.filter(**self.get_storage_key(turn_context)).delete()

    def get_property_value(self, turn_context, name):
        return self._require_cache(turn_context).state[name]

    def set_property_value(self, turn_context, name, value):
        self._require_cache(turn_context).state[name] = value

    def delete_property_value(self, turn_context, name):
        self._require_cache(turn_context).state.pop(name, None)

    def _require_cache(self, turn_context):
        cached = self.get_cached_state(turn_context)
        if cached is None:
            raise RuntimeError(f"{self._cache_key} has not been loaded for this turn.")
        return cached


class ConversationState(BotState):
    model = ConversationStateRecord

    def get_storage_key(self, turn_context):
        activity = turn_context.activity
        if not activity.channel_id or not activity.conversation_id:
            raise ValueError("Conversation state requires a channel id and a conversation id.")
        return {'channel_id': activity.channel_id, 'conversation_id': activity.conversation_id}


class UserState(BotState):
    model = UserStateRecord

    def get_storage_key(self, turn_context):
        activity = turn_context.activity
        if not activity.channel_id or not activity.user_id:
            raise ValueError("User state requires a channel id and a user id.")
        return {'channel_id': activity.channel_id, 'user_id': activity.user_id}


class StatePropertyAccessor:
    """Typed handle to one named property of a BotState."""

    def __init__(self, bot_state, name):
        self._bot_state = bot_state
        self._name = name

    @property
    def name(self):
        return self._name

    def get(self, turn_context, default_value_or_factory=None):
        """
        Return the property value. When it is missing and a default (value or
        factory) is given, the default is stored and returned; otherwise None.
        """
        self._bot_state.load(turn_context)
        try:
            return self._bot_state.get_property_value(turn_context, self._name)
        except KeyError:
            if default_value_or_factory is None:
                return None
            if callable(default_value_or_factory):
                value = default_value_or_factory()
            else:
                value = deepcopy(default_value_or_factory)
            self.set(turn_context, value)
            return value

    def set(self, turn_context, value):
        self._bot_state.load(turn_context)
        self._bot_state.set_property_value(turn_context, self._name, value)

    def delete(self, turn_context):
        self._bot_state.load(turn_context)
        self._bot_state.delete_property_value(turn_context, self._name)
