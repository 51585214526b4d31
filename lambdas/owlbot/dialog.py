"""Dialogue state machine: one inbound turn in, an ordered list of intents out.

States are ``menu``, ``directions`` and ``businesses``. The clarifying flag
overlays directions/businesses: while it is set, a quick reply is taken as the
user's pick from the "Did you mean" menu instead of being parsed again.
Fun facts, explore, about, help and feedback are one-shot actions that leave
the session in ``menu``.
"""
import json
import logging
import random
from typing import Any, Dict, List, Optional

from . import data_access, nlu
from .data_access import POOL_EXPLORE, POOL_FACTS
from .memory import STATE_BUSINESSES, STATE_DIRECTIONS, STATE_MENU, Session, SessionStore
from .resolver import EntityResolver, ResolutionResult
from .rotator import ContentRotator
from .utils import KIND_ATTACHMENT, TurnEvent, build_text
from .workers import businesses, content, directions, info

logger = logging.getLogger(__name__)

Intents = List[Dict[str, Any]]


class DialogStateMachine:
    def __init__(
        self,
        store: SessionStore,
        rotator: ContentRotator,
        buildings: EntityResolver,
        businesses_resolver: EntityResolver,
    ):
        self.store = store
        self.rotator = rotator
        self.buildings = buildings
        self.businesses = businesses_resolver
        self._commands = {
            nlu.CMD_MENU: self._menu,
            nlu.CMD_DIRECTIONS: self._enter_directions,
            nlu.CMD_BUSINESSES: self._enter_businesses,
            nlu.CMD_EXPLORE: self._explore,
            nlu.CMD_FUN_FACTS: self._fun_fact,
            nlu.CMD_ABOUT: self._transient(info.about),
            nlu.CMD_HELP: self._transient(info.help_text),
            nlu.CMD_FEEDBACK: self._transient(info.feedback),
            nlu.CMD_EASTER_EGG: self._transient(info.easter_egg),
        }
        self._states = {
            STATE_MENU: self._handle_menu,
            STATE_DIRECTIONS: self._handle_directions,
            STATE_BUSINESSES: self._handle_businesses,
        }

    def handle_turn(self, event: TurnEvent) -> Intents:
        """Fetch (or create) the sender's session and run one turn."""
        with self.store.lock_for(event.user_id):
            session = self.store.get(event.user_id)
            return self.handle_input(session, event)

    def handle_input(self, session: Session, event: TurnEvent) -> Intents:
        """Run one turn; state changes are made on `session` itself."""
        action, intents = self._dispatch(session, event)
        self._log_session(session, action)
        return intents

    def _dispatch(self, session: Session, event: TurnEvent):
        if event.kind == KIND_ATTACHMENT:
            return "attachment", info.attachment_not_understood()

        if session.clarifying and event.is_quick_reply:
            session.clarifying = False
            return "clarified", [build_text(event.payload or "")]

        command = nlu.match_command(event.content)
        if command is not None:
            session.clarifying = False
            return f"command:{command}", self._commands[command](session)

        handler = self._states.get(session.state)
        if handler is None:
            logger.error("Session %s is in unknown state %r", session.user_id, session.state)
            return "unknown_state", info.unknown_state(session.state)
        return f"state:{session.state}", handler(session, event.content)

    # --- Global commands ---

    def _menu(self, session: Session) -> Intents:
        session.state = STATE_MENU
        return info.main_menu()

    def _enter_directions(self, session: Session) -> Intents:
        session.state = STATE_DIRECTIONS
        return [build_text("Where would you like to go? Tell me a building name.")]

    def _enter_businesses(self, session: Session) -> Intents:
        session.state = STATE_BUSINESSES
        return [build_text("Which business or servery are you looking for?")]

    def _fun_fact(self, session: Session) -> Intents:
        session.state = STATE_MENU
        return content.fun_fact(self.rotator.pick_item(session.user_id, POOL_FACTS, session=session))

    def _explore(self, session: Session) -> Intents:
        session.state = STATE_MENU
        return content.exploration_spot(self.rotator.pick_item(session.user_id, POOL_EXPLORE, session=session))

    def _transient(self, render):
        def run(session: Session) -> Intents:
            session.state = STATE_MENU
            return render()
        return run

    # --- State-scoped handlers ---

    def _handle_menu(self, session: Session, text: str) -> Intents:
        return info.main_menu()

    def _handle_directions(self, session: Session, text: str) -> Intents:
        result = self.buildings.resolve(text)
        return self._answer(
            session,
            result,
            self.buildings,
            on_resolved=directions.located,
            on_not_found=directions.not_found,
            render=directions.render_location,
        )

    def _handle_businesses(self, session: Session, text: str) -> Intents:
        result = self.businesses.resolve(text)
        return self._answer(
            session,
            result,
            self.businesses,
            on_resolved=businesses.identified,
            on_not_found=businesses.not_found,
            render=businesses.render_full,
        )

    def _answer(self, session, result: ResolutionResult, resolver: EntityResolver, on_resolved, on_not_found, render) -> Intents:
        if result.ambiguous:
            session.clarifying = True
            return info.clarification_menu(resolver.member_entries(result.group), render)
        session.clarifying = False
        if result.resolved:
            return on_resolved(result.entry)
        return on_not_found()

    def _log_session(self, session: Session, action: str) -> None:
        payload = {"action": action, **session.to_log()}
        logger.info("session_state: %s", json.dumps(payload)[:8000])


def build_machine(store: Optional[SessionStore] = None, rng: Optional[random.Random] = None) -> DialogStateMachine:
    """Wire a state machine to the configured catalogs and content pools."""
    if store is None:
        store = SessionStore()
    return DialogStateMachine(
        store,
        ContentRotator(store, data_access.get_content_pools(), rng=rng),
        EntityResolver(data_access.get_buildings()),
        EntityResolver(data_access.get_businesses()),
    )
