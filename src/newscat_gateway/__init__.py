"""NewsCat Gateway - proxy backend for NewsAPI and http.cat."""

__version__ = "1.0.0"
