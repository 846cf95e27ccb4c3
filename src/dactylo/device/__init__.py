# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Keyboard event stages
# stage 0: host-specific; read the keyboard device (or a test fixture) and issue KeyEvents
# stage 1: track modifier keydown/up and annotate keystream with current modifiers
# stage 2: convert key event + modifier into character
# stage 3: KeyboardState buffers characters and held keys until the next tick
