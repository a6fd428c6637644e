import threading

import pytest

from livescroll.agent import ThrottleState, TriggerThrottle


class TestTriggerThrottle:

    def test_first_signal_starts_a_round(self):
        throttle = TriggerThrottle()
        lease = throttle.record_scroll()
        assert lease is not None
        assert throttle.state is ThrottleState.AWAITING_SNAPSHOT
        assert throttle.scroll_count == 0

    def test_counter_starts_one_below_threshold(self):
        throttle = TriggerThrottle(threshold=3)
        assert throttle.scroll_count == 2
        assert throttle.record_scroll() is not None

    def test_threshold_signals_between_rounds(self):
        throttle = TriggerThrottle(threshold=2)
        throttle.record_scroll().release()
        assert throttle.record_scroll() is None
        assert throttle.record_scroll() is not None

    def test_no_second_round_while_in_flight(self):
        throttle = TriggerThrottle(threshold=1)
        lease = throttle.record_scroll()
        for _ in range(5):
            assert throttle.record_scroll() is None
        assert throttle.state is ThrottleState.AWAITING_SNAPSHOT
        lease.release()
        assert throttle.state is ThrottleState.IDLE

    def test_signals_during_round_still_count(self):
        throttle = TriggerThrottle(threshold=3)
        with throttle.record_scroll():
            throttle.record_scroll()
            throttle.record_scroll()
            assert throttle.scroll_count == 2
        # one more signal reaches the threshold once idle
        assert throttle.record_scroll() is not None

    def test_lease_released_on_exception(self):
        throttle = TriggerThrottle()
        with pytest.raises(RuntimeError):
            with throttle.record_scroll():
                raise RuntimeError("capture failed")
        assert throttle.state is ThrottleState.IDLE

    def test_double_release_is_harmless(self):
        throttle = TriggerThrottle(threshold=1)
        lease = throttle.record_scroll()
        lease.release()
        second = throttle.record_scroll()
        lease.release()
        assert lease.released
        assert throttle.state is ThrottleState.AWAITING_SNAPSHOT
        second.release()

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            TriggerThrottle(threshold=0)

    def test_concurrent_signals_grant_one_lease(self):
        throttle = TriggerThrottle(threshold=1)
        leases = []
        barrier = threading.Barrier(8)

        def signal():
            barrier.wait()
            lease = throttle.record_scroll()
            if lease is not None:
                leases.append(lease)

        threads = [threading.Thread(target=signal) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(leases) == 1
