"""Round-trip algorithm flows through a flow store and verify them"""
