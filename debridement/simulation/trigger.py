# debridement/simulation/trigger.py
import logging

logger = logging.getLogger(__name__)

LEFT_CONTROL = "left_ctrl"


class KeyboardTrigger:
    """
    Operator keybindings: Left Control + P runs a cleanup pass, Left Control + O
    dumps the cleanup projections. Actions fire on key-down only, once per press.
    """
    def __init__(self, scheduler, modifier=LEFT_CONTROL, cleanup_key="p", dump_key="o"):
        self.scheduler = scheduler
        self.modifier = modifier
        self.cleanup_key = cleanup_key
        self.dump_key = dump_key
        self.control_down = False
        self._held = set()

    def key_down(self, key):
        key = key.lower()
        if key in self._held:
            # auto-repeat
            return None
        self._held.add(key)

        if key == self.modifier:
            self.control_down = True
            return None

        if not self.control_down or not getattr(self.scheduler.world, "ready", False):
            return None

        if key == self.cleanup_key:
            logger.info("Manual cleanup requested")
            return self.scheduler.trigger_cleanup()
        if key == self.dump_key:
            return self.scheduler.trigger_dump()
        return None

    def key_up(self, key):
        key = key.lower()
        self._held.discard(key)
        if key == self.modifier:
            self.control_down = False
