"""Tests for the broadcasting Wi-Fi channel."""

import logging

import pytest

from wifi_aci.core.channel import PhyRegistry, RegistryLockedError, RxParameters, WifiChannel
from wifi_aci.core.device import NO_CONTEXT, NetDevice, Node, WifiPhy
from wifi_aci.core.packet import MpduType, Packet, WifiPreamble, WifiTxVector
from wifi_aci.core.scheduler import SimpyScheduler
from wifi_aci.spectrum.factor import EndpointDescriptor, aci_attenuation
from wifi_aci.spectrum.mask import UnsupportedChannelWidth

PATH_LOSS_DB = 60.0


class FixedLoss:
    def calc_received_power(self, tx_power_dbm, pos_a, pos_b):
        return tx_power_dbm - PATH_LOSS_DB


class FixedDelay:
    def delay(self, pos_a, pos_b):
        return 1e-6


class RecordingScheduler:
    now = 0.0

    def __init__(self):
        self.events = []

    def schedule_with_context(self, node_id, delay, callback, *args):
        self.events.append((node_id, delay, callback, args))


def phy(channel_number=36, channel_width=20, node_id=None, **kwargs):
    device = NetDevice(Node(node_id)) if node_id is not None else None
    return WifiPhy(x=0.0, y=0.0, channel_number=channel_number, channel_width=channel_width,
                   device=device, **kwargs)


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def channel(scheduler):
    return WifiChannel(FixedLoss(), FixedDelay(), scheduler)


def send(channel, sender, packet=None, tx_power_dbm=16.0):
    return channel.send(
        sender, packet or Packet(), tx_power_dbm, WifiTxVector(), WifiPreamble.VHT, MpduType.NORMAL, 1e-4
    )


class TestTopology:
    def test_add_attaches_channel(self, channel):
        p = phy()
        assert channel.add(p) == 0
        assert p.channel is channel
        assert channel.n_devices == 1

    def test_get_device(self, channel):
        p = phy(node_id=7)
        channel.add(p)
        assert channel.get_device(0).node.node_id == 7


class TestSend:
    def test_sender_is_skipped(self, channel, scheduler):
        sender = phy()
        channel.add(sender)
        assert send(channel, sender) == 0
        assert scheduler.events == []

    def test_co_channel_delivery(self, channel, scheduler):
        sender = phy(36, 20, node_id=1)
        receiver = phy(38, 40, node_id=2)
        channel.add(sender)
        channel.add(receiver)

        assert send(channel, sender, tx_power_dbm=16.0) == 1
        node_id, delay, callback, args = scheduler.events[0]
        index, packet, params = args
        assert node_id == 2
        assert delay == 1e-6
        assert callback == channel.receive
        assert index == 1
        assert params.rx_power_dbm == pytest.approx(16.0 - PATH_LOSS_DB)
        assert params.channel_frequency_mhz == 5180.0
        assert params.channel_width == 20
        assert params.preamble is WifiPreamble.VHT
        assert params.mpdu_type is MpduType.NORMAL
        assert params.duration == 1e-4

    def test_adjacent_delivery_is_attenuated(self, channel, scheduler):
        sender = phy(40, 20)
        receiver = phy(36, 20)
        channel.add(sender)
        channel.add(receiver)

        send(channel, sender, tx_power_dbm=20.0)
        params = scheduler.events[0][3][2]
        expected = aci_attenuation(
            EndpointDescriptor(20, 5200.0, 20.0), EndpointDescriptor(20, 5180.0, receiver.tx_power_end_dbm)
        )
        assert params.rx_power_dbm == pytest.approx(20.0 - PATH_LOSS_DB + expected.attenuation_db)
        assert params.rx_power_dbm < 20.0 - PATH_LOSS_DB
        assert params.channel_frequency_mhz == 5200.0

    def test_disjoint_receiver_gets_nothing(self, channel, scheduler):
        sender = phy(36, 20)
        far = phy(52, 20)  # 5260 MHz
        channel.add(sender)
        channel.add(far)
        assert send(channel, sender) == 0
        assert scheduler.events == []

    def test_registration_order_and_indices(self, channel, scheduler):
        sender = phy(36)
        receivers = [phy(36, node_id=i) for i in range(3)]
        channel.add(receivers[0])
        channel.add(sender)
        channel.add(receivers[1])
        channel.add(receivers[2])

        assert send(channel, sender) == 3
        assert [e[3][0] for e in scheduler.events] == [0, 2, 3]
        assert [e[0] for e in scheduler.events] == [0, 1, 2]

    def test_no_device_uses_no_context(self, channel, scheduler):
        sender = phy()
        channel.add(sender)
        channel.add(phy())
        send(channel, sender)
        assert scheduler.events[0][0] == NO_CONTEXT

    def test_packet_is_copied(self, channel, scheduler):
        sender = phy()
        channel.add(sender)
        channel.add(phy())
        channel.add(phy())
        packet = Packet(size_bytes=100, payload=b"abc")
        send(channel, sender, packet=packet)
        copies = [e[3][1] for e in scheduler.events]
        assert all(c == packet and c is not packet for c in copies)
        assert copies[0] is not copies[1]

    def test_unsupported_width_isolated(self, channel, scheduler, caplog):
        sender = phy(36, 20)
        odd = phy(36, 10)
        ok = phy(36, 20)
        channel.add(sender)
        channel.add(odd)
        channel.add(ok)

        with caplog.at_level(logging.WARNING, logger="wifi_aci.core.channel"):
            assert send(channel, sender) == 1
        assert scheduler.events[0][3][0] == 2
        assert "Skipping receiver 1" in caplog.text

    def test_unsupported_sender_width_raises(self, channel, scheduler, caplog):
        sender = phy(36, 10)
        channel.add(sender)
        channel.add(phy(36, 20))
        channel.add(phy(40, 20))

        with caplog.at_level(logging.WARNING, logger="wifi_aci.core.channel"):
            with pytest.raises(UnsupportedChannelWidth):
                send(channel, sender)
        assert scheduler.events == []
        assert "Skipping receiver" not in caplog.text
        assert not channel.registry.locked


class TestRegistry:
    def test_add_during_broadcast_raises(self, scheduler):
        registry = PhyRegistry()

        class RegisteringLoss(FixedLoss):
            def calc_received_power(self, tx_power_dbm, pos_a, pos_b):
                registry.add(phy())
                return super().calc_received_power(tx_power_dbm, pos_a, pos_b)

        channel = WifiChannel(RegisteringLoss(), FixedDelay(), scheduler, registry=registry)
        sender = phy()
        channel.add(sender)
        channel.add(phy())

        with pytest.raises(RegistryLockedError):
            send(channel, sender)
        assert not registry.locked
        channel.add(phy())
        assert len(registry) == 3

    def test_locked_inside_broadcasting(self):
        registry = PhyRegistry()
        registry.add(phy())
        with registry.broadcasting() as phys:
            assert registry.locked
            assert len(phys) == 1
            with pytest.raises(RegistryLockedError):
                registry.add(phy())
        assert not registry.locked


class TestReceive:
    def test_receive_reaches_phy(self, channel):
        p = phy()
        channel.add(p)
        params = RxParameters(-70.0, MpduType.NORMAL, 1e-4, WifiTxVector(), WifiPreamble.VHT, 5180.0, 20)
        channel.receive(0, Packet(), params)
        assert len(p.receptions) == 1
        assert p.receptions[0].detected

    def test_below_energy_detection_not_detected(self, channel):
        p = phy(energy_detection_threshold_dbm=-60.0)
        channel.add(p)
        params = RxParameters(-70.0, MpduType.NORMAL, 1e-4, WifiTxVector(), WifiPreamble.VHT, 5180.0, 20)
        channel.receive(0, Packet(), params)
        assert not p.receptions[0].detected

    def test_decodable_against_sensitivity(self, channel):
        p = phy(rx_sensitivity_dbm=-76.0)
        channel.add(p)
        for power in (-80.0, -70.0):
            params = RxParameters(power, MpduType.NORMAL, 1e-4, WifiTxVector(), WifiPreamble.VHT, 5180.0, 20)
            channel.receive(0, Packet(), params)
        weak, strong = p.receptions
        assert weak.detected and not weak.decodable
        assert strong.detected and strong.decodable


class TestWithSimpy:
    def test_delivery_after_delay(self):
        sched = SimpyScheduler()
        channel = WifiChannel(FixedLoss(), FixedDelay(), sched)
        sender = phy(36, node_id=0)
        receiver = phy(36, node_id=5)
        contexts = []
        receiver.on_receive = lambda p, rx: contexts.append(sched.context)
        channel.add(sender)
        channel.add(receiver)

        send(channel, sender)
        assert receiver.receptions == []
        sched.env.run()
        assert len(receiver.receptions) == 1
        assert receiver.receptions[0].time == pytest.approx(1e-6)
        assert contexts == [5]
        assert sched.context == NO_CONTEXT

    def test_phy_send_requires_channel(self):
        with pytest.raises(RuntimeError, match="not attached"):
            phy().send(Packet())

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            SimpyScheduler().schedule(-1.0, lambda: None)
