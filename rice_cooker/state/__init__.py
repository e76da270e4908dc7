"""
Rice cooker state machine and cookdown timer.

Manages the power, ingredient and cook cycle state of the appliance.
Handles transitions between IDLE → COOKING → IDLE, with steam and keep-warm
sub-modes inside a cook cycle.
"""
