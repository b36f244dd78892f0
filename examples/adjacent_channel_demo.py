#!/usr/bin/env python3
"""Adjacent-channel interference example.

Places an access point on 20 MHz channel 36 and four stations on channels 36,
40, 44 and 52, lets each station transmit once, then reports what the access
point received and its resulting interference budget.
"""

import logging

from wifi_aci.core import NetDevice, Node, Packet, Simulation, WifiPhy


def main() -> None:
    logging.basicConfig(format="%(asctime)s - %(levelname)s - %(message)s", level=logging.INFO)

    # --- Simulation (log-distance, exponent 3, 5180 MHz) ---
    sim = Simulation(pathloss_model="log-distance", pathloss_exponent=3.0, frequency_mhz=5180.0)

    # --- Access point ---
    ap = WifiPhy(x=0.0, y=0.0, channel_number=36, device=NetDevice(Node(0)), label="AP-36")
    sim.add_phy(ap)

    # --- Stations ---
    stations = []
    for node_id, (ch, x) in enumerate([(36, 20.0), (40, 15.0), (44, 10.0), (52, 5.0)], start=1):
        sta = WifiPhy(x=x, y=0.0, channel_number=ch, device=NetDevice(Node(node_id)), label=f"STA-{ch}")
        sim.add_phy(sta)
        stations.append(sta)

    # --- One frame per station, 1 ms apart ---
    for k, sta in enumerate(stations):
        sim.transmit(sta, Packet(size_bytes=1500), at=k * 1e-3, duration=250e-6)

    result = sim.run()

    print("=" * 60)
    print("Receptions at AP-36")
    print("=" * 60)
    for rx in result.receptions["AP-36"]:
        print(f"  t={rx.time * 1e3:8.4f} ms  from {rx.params.channel_frequency_mhz:.0f} MHz"
              f"  rx={rx.params.rx_power_dbm:8.2f} dBm  detected={rx.detected}  decodable={rx.decodable}")
    print(f"  noise floor      : {result.noise_floor_dbm['AP-36']:.2f} dBm")
    print(f"  total rx power   : {result.total_power_dbm['AP-36']:.2f} dBm")
    print(f"  deliveries/total : {result.deliveries} from {result.transmissions} transmissions")
    print("=" * 60)


if __name__ == "__main__":
    main()
