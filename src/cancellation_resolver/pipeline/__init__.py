"""Pipeline stages, in execution order.

ServiceSourceHandler -> PromptPlanner -> APIHandler -> NormalizeHandler
-> ValidateHandler -> ResultWriter
"""
