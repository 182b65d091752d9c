"""
Integration tests for the GCM sender.

Exercise Sender end-to-end over the real HttpTransport, with the connection
server replaced by an httpx.MockTransport that replays scripted responses.
"""
