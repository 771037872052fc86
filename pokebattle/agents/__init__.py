"""Agent implementations and interfaces."""

from pokebattle.agents.agent_interface import Agent
from pokebattle.agents.first_available_agent import FirstAvailableAgent
from pokebattle.agents.random_agent import RandomAgent

__all__ = ["Agent", "RandomAgent", "FirstAvailableAgent"]
