from prolist.rules_engine.rules import DEFAULT_RULES, RuleSet, evaluate

__all__ = ["DEFAULT_RULES", "RuleSet", "evaluate"]
