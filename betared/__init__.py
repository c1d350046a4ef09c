"""Beta reduction of untyped lambda calculus terms."""
