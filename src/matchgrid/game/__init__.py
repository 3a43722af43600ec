"""Game management layer — controller, clock, schedulers, state machine.

Quick start::

    from matchgrid.game import GameConfig, GameController, VirtualScheduler

    scheduler = VirtualScheduler()
    ctrl = GameController(scheduler, GameConfig.tiny())
    ctrl.events.on_won.append(lambda: print("You win!"))
    ctrl.start()
    ctrl.flip(1)
    scheduler.advance(1000)
"""

from matchgrid.game.clock import ClockEvents, GameClock
from matchgrid.game.controller import GameController, GameEvents
from matchgrid.game.interfaces import (
    GameConfig,
    GamePhase,
    IClock,
    IGameController,
    IScheduler,
    ScheduledCall,
)
from matchgrid.game.scheduler import VirtualCall, VirtualScheduler

__all__ = [
    # Interfaces
    "GameConfig",
    "GamePhase",
    "IClock",
    "IGameController",
    "IScheduler",
    "ScheduledCall",
    # Concrete
    "ClockEvents",
    "GameClock",
    "GameController",
    "GameEvents",
    "VirtualCall",
    "VirtualScheduler",
]
