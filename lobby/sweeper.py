"""
Stale-connection sweeper.

Periodically removes members whose connection reports closed but who
never went through the normal disconnect path. By default the removal
is registry-only: the member disappears from the session registry but
stays in its lobby's member list, receives no broadcasts (its session
is gone) and is left out of snapshots. Once no id in a lobby has a
session the lobby itself is deleted. With full_leave=True the sweeper
runs the complete disconnect transition instead.
"""

import logging
from .manager import LobbyManager
from utils.constants import SWEEP_INTERVAL_SECONDS

logger = logging.getLogger(__name__)

class StaleConnectionSweeper:
    """Background pass reclaiming members of closed connections."""

    def __init__(self, lobby_manager: LobbyManager,
                 interval_seconds: float = SWEEP_INTERVAL_SECONDS,
                 full_leave: bool = False):
        """
        Args:
            lobby_manager: Manager whose registries are swept
            interval_seconds: Seconds between sweeps
            full_leave: Run the disconnect transition instead of a registry-only removal
        """
        self.lobby_manager = lobby_manager
        self.interval_seconds = interval_seconds
        self.full_leave = full_leave
        self.running = False

    def sweep(self) -> int:
        """
        Run one pass.

        Each stale member is handled under its own lobby's lock only. A
        lobby left holding nothing but swept ids is deleted.

        Returns:
            Number of members removed
        """
        sessions = self.lobby_manager.sessions
        lobbies = self.lobby_manager.lobbies
        removed = 0

        for member in sessions.values():
            if member.connection.is_open:
                continue

            if self.full_leave:
                if self.lobby_manager.disconnect_member(member.id):
                    removed += 1
                continue

            lobby_code = member.lobby_code
            if lobby_code is None:
                # Mid-leave; the leaving caller removes the session
                continue

            with lobbies.lock(lobby_code):
                if sessions.remove(member.id) is not None:
                    removed += 1
                self.lobby_manager.delete_if_abandoned(lobby_code)

        if removed > 0:
            logger.info(f"Cleaned up {removed} disconnected member(s)")
        return removed

    def run(self, socketio) -> None:
        """
        Sweep every interval until stop() is called.

        Meant to be started with socketio.start_background_task so it
        cooperates with the server's async mode.
        """
        self.running = True
        logger.info(f"Stale-connection sweeper started (every {self.interval_seconds}s)")
        while self.running:
            socketio.sleep(self.interval_seconds)
            if not self.running:
                break
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"Error during stale-connection sweep: {e}")
        logger.info("Stale-connection sweeper stopped")

    def start(self, socketio):
        """Start the sweep loop as a Socket.IO background task."""
        return socketio.start_background_task(self.run, socketio)

    def stop(self) -> None:
        self.running = False
