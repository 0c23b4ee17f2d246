"""Dispatch KPIs computed from a solved schedule.

Key Metrics:
- Energy served per source (MWh)
- Renewable share of demand and renewable utilization
- Battery throughput and round-trip losses
- Total generation cost
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from smartgrid.domain.models import DispatchParameters, DispatchSolution


@dataclass
class DispatchSummary:
    """Aggregate metrics for one 24-hour dispatch.

    Attributes:
        total_demand_mwh: Energy demanded over the horizon.
        solar_mwh: Solar energy dispatched.
        wind_mwh: Wind energy dispatched.
        gas_mwh: Gas energy dispatched.
        charged_mwh: Energy drawn from the grid into the battery.
        discharged_mwh: Energy delivered by the battery to the grid.
        renewable_available_mwh: Solar plus wind availability.
        renewable_share: Fraction of demand met by solar and wind.
        renewable_utilization: Fraction of available renewable energy used.
        gas_share: Fraction of demand met by gas.
        battery_losses_mwh: Charged minus discharged energy.
        total_cost: Total generation cost ($).
    """

    total_demand_mwh: float = 0.0
    solar_mwh: float = 0.0
    wind_mwh: float = 0.0
    gas_mwh: float = 0.0
    charged_mwh: float = 0.0
    discharged_mwh: float = 0.0
    renewable_available_mwh: float = 0.0
    renewable_share: float = 0.0
    renewable_utilization: float = 0.0
    gas_share: float = 0.0
    battery_losses_mwh: float = 0.0
    total_cost: float = 0.0

    @classmethod
    def from_solution(
        cls, params: DispatchParameters, solution: DispatchSolution
    ) -> DispatchSummary:
        """Calculate dispatch metrics.

        Args:
            params: Parameters the solution was computed from.
            solution: Solution carrying per-hour values.

        Returns:
            DispatchSummary with calculated values.

        Raises:
            ValueError: If the solution has no per-hour values.
        """
        if not solution.has_values:
            raise ValueError(
                f"Cannot summarize a solution without values (status: {solution.status.value})"
            )

        # Hourly periods: MW over one hour is MWh
        total_demand = float(np.sum(params.demand))
        solar = float(np.sum(solution.solar))
        wind = float(np.sum(solution.wind))
        gas = float(np.sum(solution.gas))
        charged = float(np.sum(solution.charge))
        discharged = float(np.sum(solution.discharge))
        available = float(
            np.sum(params.solar_availability) + np.sum(params.wind_availability)
        )

        return cls(
            total_demand_mwh=total_demand,
            solar_mwh=solar,
            wind_mwh=wind,
            gas_mwh=gas,
            charged_mwh=charged,
            discharged_mwh=discharged,
            renewable_available_mwh=available,
            renewable_share=(solar + wind) / max(total_demand, 0.001),
            renewable_utilization=(solar + wind) / max(available, 0.001),
            gas_share=gas / max(total_demand, 0.001),
            battery_losses_mwh=charged - discharged,
            total_cost=solution.objective_value or 0.0,
        )

    @property
    def renewable_mwh(self) -> float:
        return self.solar_mwh + self.wind_mwh

    @property
    def average_cost_per_mwh(self) -> float:
        """Generation cost per MWh of demand served."""
        return self.total_cost / max(self.total_demand_mwh, 0.001)

    def to_dict(self) -> dict[str, float]:
        return {
            "total_demand_mwh": self.total_demand_mwh,
            "solar_mwh": self.solar_mwh,
            "wind_mwh": self.wind_mwh,
            "gas_mwh": self.gas_mwh,
            "charged_mwh": self.charged_mwh,
            "discharged_mwh": self.discharged_mwh,
            "renewable_available_mwh": self.renewable_available_mwh,
            "renewable_share": self.renewable_share,
            "renewable_utilization": self.renewable_utilization,
            "gas_share": self.gas_share,
            "battery_losses_mwh": self.battery_losses_mwh,
            "total_cost": self.total_cost,
        }
