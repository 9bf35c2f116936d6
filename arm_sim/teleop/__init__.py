"""
Keyboard teleoperation for jogging the arm joint by joint.
"""
