# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Matching stages, once per tick
# stage 1: frames; fold the tick's typed text and virtual input into single-character tokens
# stage 2: registry; acquire a target if none is held, then feed each token to the targets
# stage 3: sequence; advance progress on a match, emit accepted/rejected/completed
